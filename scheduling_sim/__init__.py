"""
Scheduling simulator package.

Simulates uniprocessor CPU scheduling policies (FCFS, SJF, SJF-Priority,
Round Robin) over a batch of processes and reports per-process timings,
aggregate statistics and a Gantt timeline.
"""

from .algorithms import (
    ALGORITHMS,
    FCFSScheduler,
    RoundRobinScheduler,
    Scheduler,
    SJFPriorityScheduler,
    SJFScheduler,
    run_algorithm,
)
from .errors import InvalidInputError, LogicalStallError, SchedulerError
from .models import Process, ScheduleResult, ScheduleStats, TimeSlice

__all__ = [
    "ALGORITHMS",
    "FCFSScheduler",
    "InvalidInputError",
    "LogicalStallError",
    "Process",
    "RoundRobinScheduler",
    "ScheduleResult",
    "ScheduleStats",
    "Scheduler",
    "SchedulerError",
    "SJFPriorityScheduler",
    "SJFScheduler",
    "TimeSlice",
    "run_algorithm",
]
