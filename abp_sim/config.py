from dataclasses import dataclass
from typing import Optional

from abp_sim.errors import InvalidConfiguration

# Experiment parameters
HEADER_LENGTH = 54          # bytes
PAYLOAD_LENGTH = 1500       # bytes
CHANNEL_CAPACITY = 5_000_000.0   # bit/s
TARGET_PACKETS = 5000
LOSS_PROBABILITY = 0.1

# Sweep: delta = delta/tau * tau
DELTA_TAU_VALUES = [2.5, 5.0, 7.5, 10.0, 12.5]
TAU_VALUES_MS = [10, 500]
BER_VALUES = [0.0, 0.00001, 0.0001]

# At this many bit errors a frame is treated as lost rather than corrupted.
UNRECOVERABLE_ERRORS = 5


@dataclass(frozen=True)
class SimConfig:
    header_length: int = HEADER_LENGTH
    payload_length: int = PAYLOAD_LENGTH
    delta: float = 0.05
    capacity: float = CHANNEL_CAPACITY
    tau: float = 0.01
    ber: float = 0.0
    target_packets: int = TARGET_PACKETS
    loss_prob: float = LOSS_PROBABILITY
    persistent_receiver: bool = True
    max_sends: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.header_length <= 0:
            raise InvalidConfiguration(f"header_length must be positive, got {self.header_length}")
        if self.payload_length <= self.header_length:
            raise InvalidConfiguration(
                f"payload_length ({self.payload_length}) must exceed header_length ({self.header_length})"
            )
        if self.capacity <= 0:
            raise InvalidConfiguration(f"capacity must be positive, got {self.capacity}")
        if self.delta < 0:
            raise InvalidConfiguration(f"delta must be non-negative, got {self.delta}")
        if self.tau < 0:
            raise InvalidConfiguration(f"tau must be non-negative, got {self.tau}")
        if not 0.0 <= self.ber <= 1.0:
            raise InvalidConfiguration(f"ber must be in [0, 1], got {self.ber}")
        if not 0.0 <= self.loss_prob < 1.0:
            # loss_prob == 1 means no frame ever arrives
            raise InvalidConfiguration(f"loss_prob must be in [0, 1), got {self.loss_prob}")
        if self.target_packets < 0:
            raise InvalidConfiguration(f"target_packets must be non-negative, got {self.target_packets}")
        if self.max_sends is not None and self.max_sends <= 0:
            raise InvalidConfiguration(f"max_sends must be positive, got {self.max_sends}")

    @property
    def frame_bits(self):
        return (self.header_length + self.payload_length) * 8

    @property
    def header_bits(self):
        return self.header_length * 8

    @property
    def payload_bits(self):
        return self.payload_length * 8
