import numpy as np

from abp_sim.config import UNRECOVERABLE_ERRORS
from abp_sim.errors import InvalidConfiguration
from abp_sim.events import Ack, Nil


class ChannelModel:
    """One direction of a link: packet loss composited with independent bit errors."""

    def __init__(self, tau, loss_prob, ber, rng=None):
        if not 0.0 <= loss_prob <= 1.0:
            raise InvalidConfiguration(f"loss_prob must be in [0, 1], got {loss_prob}")
        if not 0.0 <= ber <= 1.0:
            raise InvalidConfiguration(f"ber must be in [0, 1], got {ber}")
        if tau < 0:
            raise InvalidConfiguration(f"tau must be non-negative, got {tau}")
        self.tau = tau
        self.loss = loss_prob
        self.ber = ber
        self.rng = rng if rng is not None else np.random.default_rng()

    def count_bit_errors(self, frame_length_bits):
        if self.ber == 0.0 or frame_length_bits <= 0:
            return 0
        draws = self.rng.random(int(frame_length_bits))
        return int(np.count_nonzero(draws < self.ber))

    def transmit_frame(self, time_, sequence_number, frame_length_bits):
        arrival = time_ + self.tau

        if self.rng.random() < self.loss:
            return Nil(arrival)

        errors = self.count_bit_errors(frame_length_bits)
        if errors >= UNRECOVERABLE_ERRORS:
            return Nil(arrival)
        return Ack(arrival, sequence_number, errors > 0)
