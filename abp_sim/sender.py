from abp_sim.channel import ChannelModel
from abp_sim.events import Nil
from abp_sim.receiver import ReceiverState


class SenderState:
    def __init__(self, delta, capacity, payload_length, header_length, tau, ber,
                 loss_prob, rng=None, persistent_receiver=True):
        self.delta = delta
        self.capacity = capacity
        # L = H + l, in bits
        self.frame_bits = (header_length + payload_length) * 8
        self.header_bits = header_length * 8
        self.tau = tau
        self.ber = ber

        self.sn = 0
        self.next_expected_ack = 1
        self.current_time = 0.0

        self.channel = ChannelModel(tau, loss_prob, ber, rng)
        self.persistent_receiver = persistent_receiver
        self.receiver = ReceiverState()

        self.lost_forward = 0
        self.lost_reverse = 0

    @property
    def transmission_time(self):
        return self.frame_bits / self.capacity

    def timeout_deadline(self):
        return self.current_time + self.delta + self.transmission_time

    def advance(self):
        self.sn = (self.sn + 1) % 2
        self.next_expected_ack = (self.next_expected_ack + 1) % 2

    def send(self):
        """Send the current frame and return what comes back to the sender.

        Nil if the frame or its ACK was lost, otherwise the ACK as it
        arrives after the reverse hop.
        """
        if not self.persistent_receiver:
            self.receiver = ReceiverState()

        t = self.current_time + self.transmission_time
        arrived = self.channel.transmit_frame(t, self.sn, self.frame_bits)
        if isinstance(arrived, Nil):
            self.lost_forward += 1
            return arrived

        # the receiver clock only moves forward by the time since its last arrival
        ack = self.receiver.receive_frame(
            arrived.time - self.receiver.current_time, arrived.error_flag, arrived.sequence_number
        )

        t = ack.time + self.header_bits / self.capacity
        returned = self.channel.transmit_frame(t, ack.sequence_number, self.header_bits)
        if isinstance(returned, Nil):
            self.lost_reverse += 1
        return returned
