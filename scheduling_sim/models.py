from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import InvalidInputError


@dataclass
class Process:
    """
    A schedulable unit of work plus the state one driver mutates while
    simulating it.

    ``priority`` is only read by the SJF-Priority driver, which treats it as
    time already credited to the process: waiting = turnaround - priority.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0

    remaining_burst: int = field(init=False)
    completed: bool = field(default=False, init=False)
    completion_time: Optional[int] = field(default=None, init=False)
    turnaround_time: Optional[int] = field(default=None, init=False)
    waiting_time: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(self, name)
            # bool is an int subclass but never a valid tick count
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidInputError(
                    f"Process {self.pid!r}: {name} must be an integer (got {value!r})"
                )
        if self.arrival_time < 0:
            raise InvalidInputError(
                f"Process {self.pid!r}: arrival time must be >= 0 (got {self.arrival_time})"
            )
        if self.burst_time <= 0:
            raise InvalidInputError(
                f"Process {self.pid!r}: burst time must be > 0 (got {self.burst_time})"
            )
        self.remaining_burst = self.burst_time

    def fresh(self) -> "Process":
        """Independent copy with the simulation state reset."""
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )

    def run_for(self, ticks: int) -> None:
        if ticks <= 0 or ticks > self.remaining_burst:
            raise ValueError(
                f"Process {self.pid!r}: cannot run {ticks} tick(s) with {self.remaining_burst} remaining"
            )
        self.remaining_burst -= ticks

    def finish(self, completion_time: int, turnaround_time: int, waiting_time: int) -> None:
        self.remaining_burst = 0
        self.completed = True
        self.completion_time = completion_time
        self.turnaround_time = turnaround_time
        self.waiting_time = waiting_time


@dataclass
class TimeSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start


@dataclass
class ScheduleStats:
    avg_waiting: float
    avg_turnaround: float
    throughput: float
    elapsed: int
    cpu_busy_time: int = 0
    cpu_utilization: float = 0.0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[TimeSlice] = field(default_factory=list)
    stats: Optional[ScheduleStats] = None


def clone_batch(processes: Iterable[Process]) -> List[Process]:
    return [p.fresh() for p in processes]


def validate_batch(processes: List[Process]) -> None:
    """
    Refuse batches no driver can simulate meaningfully.
    """
    if not processes:
        raise InvalidInputError("Cannot schedule an empty batch of processes")

    seen: set = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidInputError(f"Duplicate process id {p.pid!r} in batch")
        seen.add(p.pid)
