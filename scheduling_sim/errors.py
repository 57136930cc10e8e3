from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidInputError(SchedulerError, ValueError):
    """
    The batch (or a parameter such as the quantum) cannot be simulated:
    empty batch, duplicate pid, non-positive burst, negative arrival.
    """


class LogicalStallError(SchedulerError, RuntimeError):
    """A driver ran past its tick bound without finishing every process."""

    def __init__(self, algorithm: str, max_ticks: int, unfinished: int) -> None:
        super().__init__(
            f"{algorithm}: {unfinished} process(es) unfinished after {max_ticks} ticks"
        )
        self.algorithm = algorithm
        self.max_ticks = max_ticks
        self.unfinished = unfinished
