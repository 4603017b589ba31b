from abp_sim.config import SimConfig
from abp_sim.errors import EmptySchedulerAccess, InvalidConfiguration, SendLimitExceeded, SimulationError
from abp_sim.events import Ack, Nil, Timeout
from abp_sim.simulator import ABPSimulator, clean_channel_throughput, run_simulation

__version__ = "0.1.0"
