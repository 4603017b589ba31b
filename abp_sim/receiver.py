from abp_sim.events import Ack


class ReceiverState:
    def __init__(self):
        self.next_expected_frame = 0
        self.current_time = 0.0
        self.accepted = 0

    def receive_frame(self, arrival_delay, error_flag, sequence_number):
        """Accept the frame if it is clean and in order, then acknowledge.

        An ACK is produced for every frame, corrupted or duplicate ones
        included; it always names the next frame the receiver wants.
        """
        self.current_time += arrival_delay

        if not error_flag and sequence_number == self.next_expected_frame:
            self.next_expected_frame = (self.next_expected_frame + 1) % 2
            self.accepted += 1

        return Ack(self.current_time, self.next_expected_frame, error_flag)
