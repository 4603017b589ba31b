import numpy as np

from abp_sim.config import SimConfig
from abp_sim.errors import SendLimitExceeded
from abp_sim.events import Ack, Nil, Timeout, describe
from abp_sim.scheduler import EventScheduler
from abp_sim.sender import SenderState


class ABPSimulator:
    """Alternating Bit Protocol over a lossy channel, run until `target_packets` are delivered.

    The random source is per run: pass a numpy Generator as `rng`, or a `seed`
    to build one. Neither gives a fresh unseeded generator.
    """

    def __init__(self, header_length, payload_length, delta, capacity, tau, ber, target_packets,
                 loss_prob=0.1, persistent_receiver=True, max_sends=None,
                 rng=None, seed=None, verbose=False, debug=False):
        self.config = SimConfig(
            header_length=header_length, payload_length=payload_length, delta=delta,
            capacity=capacity, tau=tau, ber=ber, target_packets=target_packets,
            loss_prob=loss_prob, persistent_receiver=persistent_receiver, max_sends=max_sends,
        )
        self.H = header_length
        self.l = payload_length
        self.N = target_packets
        self.max_sends = max_sends
        self.verbose = verbose
        self.debug = debug

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.scheduler = EventScheduler()
        self.sender = SenderState(
            delta, capacity, payload_length, header_length, tau, ber, loss_prob,
            rng=self.rng, persistent_receiver=persistent_receiver,
        )

        self.packets_sent = 0
        self.packets_received = 0
        self.retransmissions = 0
        self.timeout_events = 0
        self.stale_acks = 0
        self.corrupted_acks = 0
        self.frames_lost = 0
        self.throughput = None
        self.log = []

        self._new_frame = True

    @classmethod
    def from_config(cls, config, **kwargs):
        return cls(
            config.header_length, config.payload_length, config.delta, config.capacity,
            config.tau, config.ber, config.target_packets,
            loss_prob=config.loss_prob, persistent_receiver=config.persistent_receiver,
            max_sends=config.max_sends, **kwargs,
        )

    @property
    def current_time(self):
        return self.sender.current_time

    def _send(self):
        if self.max_sends is not None and self.packets_sent >= self.max_sends:
            raise SendLimitExceeded(self.max_sends, self.packets_received, self.N)

        purged = self.scheduler.purge_timeout()
        if self.debug and purged:
            self.log.append((self.current_time, f"DEBUG: purged {purged} stale timeout(s)"))

        deadline = self.sender.timeout_deadline()
        self.scheduler.register_timeout(deadline, self.sender.sn)

        if not self._new_frame:
            self.retransmissions += 1
        self._new_frame = False

        ev = self.sender.send()
        self.packets_sent += 1
        if self.verbose:
            self.log.append((self.current_time, f"SEND sn={self.sender.sn} -> {describe(ev)} at {ev.time:.6f}, timeout at {deadline:.6f}"))

        if isinstance(ev, Nil):
            self.frames_lost += 1
        else:
            self.scheduler.schedule_event(ev)

    def _handle(self, ev):
        sender = self.sender

        if isinstance(ev, Ack) and not ev.error_flag and ev.sequence_number == sender.next_expected_ack:
            self.packets_received += 1
            self.scheduler.purge_timeout()
            sender.advance()
            self._new_frame = True
            if self.verbose:
                self.log.append((ev.time, f"DELIVERED {self.packets_received}/{self.N}"))
        elif isinstance(ev, Ack):
            # timeout stays armed and will trigger the resend
            if ev.error_flag:
                self.corrupted_acks += 1
            else:
                self.stale_acks += 1
            if self.debug:
                self.log.append((ev.time, f"DEBUG: ignored {describe(ev)}, expecting {sender.next_expected_ack}"))
        elif isinstance(ev, Timeout):
            self.timeout_events += 1
            if self.verbose:
                self.log.append((ev.time, f"TIMEOUT sn={ev.sequence_number}"))

    def run(self):
        if self.N == 0:
            self.throughput = 0.0
            return self.throughput

        while self.packets_received < self.N:
            if not self.scheduler.has_timeout():
                self._send()

            ev = self.scheduler.pop_event()
            self.sender.current_time = ev.time
            self._handle(ev)

        delivered_bits = self.packets_received * self.l * 8 - self.packets_received * self.H * 8
        self.throughput = delivered_bits / self.sender.current_time
        return self.throughput

    def results(self):
        efficiency = self.packets_received / self.packets_sent if self.packets_sent > 0 else 0.0
        return {
            "protocol": "ABP",
            "H": self.H,
            "l": self.l,
            "delta": self.config.delta,
            "C": self.config.capacity,
            "tau": self.config.tau,
            "BER": self.config.ber,
            "loss": self.config.loss_prob,
            "N": self.N,
            "packets_sent": self.packets_sent,
            "packets_received": self.packets_received,
            "retransmissions": self.retransmissions,
            "timeout_events": self.timeout_events,
            "stale_acks": self.stale_acks,
            "corrupted_acks": self.corrupted_acks,
            "frames_lost": self.frames_lost,
            "time": round(self.current_time, 6),
            "efficiency": round(efficiency, 6),
            "throughput": self.throughput,
        }


def round_trip_time(config):
    """Send-to-ACK time of one frame on a channel without losses or errors."""
    return (config.frame_bits + config.header_bits) / config.capacity + 2 * config.tau


def clean_channel_throughput(config):
    return (config.payload_bits - config.header_bits) / round_trip_time(config)


def run_simulation(config, seed=None, rng=None, verbose=False, debug=False):
    sim = ABPSimulator.from_config(config, seed=seed, rng=rng, verbose=verbose, debug=debug)
    sim.run()
    return sim.results(), sim
