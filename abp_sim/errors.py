class SimulationError(Exception):
    """Base class for every error raised by the simulator."""


class EmptySchedulerAccess(SimulationError, IndexError):
    """peek/pop on a scheduler with no pending events."""


class InvalidConfiguration(SimulationError, ValueError):
    """A simulation parameter is out of its valid range."""


class SendLimitExceeded(SimulationError, RuntimeError):
    def __init__(self, max_sends, packets_received, target):
        self.max_sends = max_sends
        self.packets_received = packets_received
        self.target = target
        super().__init__(
            f"reached {max_sends} sends with only {packets_received}/{target} packets delivered"
        )
