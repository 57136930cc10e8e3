from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Tuple, Type

from .errors import InvalidInputError, LogicalStallError
from .metrics import compute_statistics
from .models import Process, ScheduleResult, TimeSlice, clone_batch, validate_batch
from .selection import admit_arrivals, find_shortest_job, refresh_waiting_set, sort_by_arrival

logger = logging.getLogger(__name__)


def tick_bound(processes: List[Process]) -> int:
    """
    Upper bound on the ticks any driver needs: the last arrival plus every
    burst run back to back.
    """
    return max(p.arrival_time for p in processes) + sum(p.burst_time for p in processes) + 1


class Scheduler(ABC):
    """
    A scheduling policy. ``simulate`` validates and clones the batch, so the
    caller's processes are never mutated and runs never see each other.
    """

    name: str = ""
    quantum: Optional[int] = None

    def __init__(self, max_ticks: Optional[int] = None) -> None:
        self.max_ticks = max_ticks

    def simulate(self, processes: Iterable[Process]) -> ScheduleResult:
        batch = list(processes)
        validate_batch(batch)

        working = clone_batch(batch)
        limit = self.max_ticks if self.max_ticks is not None else tick_bound(working)

        timeline, elapsed = self._run(working, limit)
        stats = compute_statistics(working, elapsed, timeline)

        logger.info(
            "%s: %d processes in %d ticks (avg wait %.2f, avg turnaround %.2f, throughput %.3f)",
            self.name,
            len(working),
            elapsed,
            stats.avg_waiting,
            stats.avg_turnaround,
            stats.throughput,
        )
        return ScheduleResult(
            algorithm=self.name,
            quantum=self.quantum,
            processes=working,
            timeline=timeline,
            stats=stats,
        )

    @abstractmethod
    def _run(self, processes: List[Process], max_ticks: int) -> Tuple[List[TimeSlice], int]:
        """
        Simulate ``processes`` in place; return the timeline and the elapsed
        ticks used as the throughput denominator.
        """

    def _stall(self, max_ticks: int, processes: List[Process]) -> LogicalStallError:
        unfinished = sum(1 for p in processes if not p.completed)
        logger.error("%s stalled with %d unfinished process(es)", self.name, unfinished)
        return LogicalStallError(self.name, max_ticks, unfinished)


class FCFSScheduler(Scheduler):
    """
    First-Come First-Serve (non-preemptive).

    Dispatch order is the caller's list order, not sorted arrival order. The
    first process never waits; gaps between the service clock and a later
    arrival are not modelled as idle time.
    """

    name = "FCFS"

    def _run(self, processes: List[Process], max_ticks: int) -> Tuple[List[TimeSlice], int]:
        clock = 0
        timeline: List[TimeSlice] = []
        last_completion = 0

        for index, p in enumerate(processes):
            waiting_time = 0 if index == 0 else max(0, clock - p.arrival_time)
            start = waiting_time + p.arrival_time

            clock += p.burst_time
            turnaround_time = p.burst_time + waiting_time
            completion_time = p.burst_time + p.arrival_time + waiting_time

            timeline.append(TimeSlice(pid=p.pid, start=start, stop=start + p.burst_time))
            p.finish(completion_time, turnaround_time, waiting_time)
            last_completion = completion_time

            logger.debug("FCFS: %s runs %d-%d (waited %d)", p.pid, start, start + p.burst_time, waiting_time)

        return timeline, last_completion


class SJFScheduler(Scheduler):
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. If nothing has
    arrived the CPU idles for one tick.
    """

    name = "SJF (non-preemptive)"

    def _run(self, processes: List[Process], max_ticks: int) -> Tuple[List[TimeSlice], int]:
        pool = sort_by_arrival(processes)

        clock = 0
        timeline: List[TimeSlice] = []

        while pool:
            if clock > max_ticks:
                raise self._stall(max_ticks, processes)

            p = find_shortest_job(pool, clock)
            if p is None:
                logger.debug("SJF: t=%d idle", clock)
                clock += 1
                continue

            waiting_time = max(0, clock - p.arrival_time)
            turnaround_time = p.burst_time + waiting_time
            completion_time = p.burst_time + clock

            timeline.append(TimeSlice(pid=p.pid, start=clock, stop=completion_time))
            p.finish(completion_time, turnaround_time, waiting_time)
            logger.debug("SJF: %s runs %d-%d (waited %d)", p.pid, clock, completion_time, waiting_time)

            clock += p.burst_time
            pool = [q for q in pool if q is not p]

        return timeline, clock


class SJFPriorityScheduler(Scheduler):
    """
    Tick-driven shortest-remaining-burst scheduling with legacy waiting-time
    accounting.

    Every tick the arrived processes are ranked by remaining burst, but a new
    process is only dispatched when the CPU is free: an active process is
    never preempted. On completion the waiting time is ``turnaround -
    priority``, the priority field being read as time already credited to the
    process.
    """

    name = "SJF-Priority"

    def _run(self, processes: List[Process], max_ticks: int) -> Tuple[List[TimeSlice], int]:
        t = 0
        finished = 0
        waiting: List[Process] = []
        active: Optional[Process] = None
        dispatched_at = 0
        timeline: List[TimeSlice] = []

        while finished < len(processes):
            if t > max_ticks:
                raise self._stall(max_ticks, processes)

            refresh_waiting_set(waiting, processes, t, active)
            if active is None and waiting:
                active = waiting.pop(0)
                dispatched_at = t
                logger.debug("SJF-Priority: t=%d dispatch %s (burst %d)", t, active.pid, active.remaining_burst)

            if active is not None:
                active.run_for(1)
                if active.remaining_burst == 0:
                    turnaround_time = (t + 1) - active.arrival_time
                    active.finish(t + 1, turnaround_time, turnaround_time - active.priority)
                    timeline.append(TimeSlice(pid=active.pid, start=dispatched_at, stop=t + 1))
                    finished += 1
                    active = None

            t += 1

        return timeline, t


class RoundRobinScheduler(Scheduler):
    """
    Round Robin scheduling with a fixed time quantum.
    """

    name = "Round Robin"

    def __init__(self, quantum: Optional[int], max_ticks: Optional[int] = None) -> None:
        if quantum is None or quantum <= 0:
            raise InvalidInputError("Round Robin requires a positive quantum (use --quantum)")
        super().__init__(max_ticks=max_ticks)
        self.quantum = quantum

    def _run(self, processes: List[Process], max_ticks: int) -> Tuple[List[TimeSlice], int]:
        pending: Deque[Process] = deque(sort_by_arrival(processes))
        ready: Deque[Process] = deque()

        clock = 0
        unfinished = len(processes)
        timeline: List[TimeSlice] = []

        while unfinished:
            if clock > max_ticks:
                raise self._stall(max_ticks, processes)

            admit_arrivals(pending, ready, clock)
            if not ready:
                if not pending:
                    raise self._stall(max_ticks, processes)
                # Jump to the next arrival if the CPU is idle
                logger.debug("RR: idle %d-%d", clock, pending[0].arrival_time)
                clock = pending[0].arrival_time
                continue

            p = ready.popleft()
            run_time = min(self.quantum, p.remaining_burst)
            start = clock
            clock += run_time
            p.run_for(run_time)
            timeline.append(TimeSlice(pid=p.pid, start=start, stop=clock))

            # Arrivals during the slice queue ahead of the preempted process
            admit_arrivals(pending, ready, clock)

            if p.remaining_burst > 0:
                ready.append(p)
            else:
                turnaround_time = clock - p.arrival_time
                p.finish(clock, turnaround_time, turnaround_time - p.burst_time)
                unfinished -= 1
                logger.debug("RR: %s completes at %d", p.pid, clock)

        return timeline, clock


ALGORITHMS: Dict[str, Type[Scheduler]] = {
    "fcfs": FCFSScheduler,
    "sjf": SJFScheduler,
    "sjf-priority": SJFPriorityScheduler,
    "rr": RoundRobinScheduler,
}

QUANTUM_ALGORITHMS = {"rr"}


def make_scheduler(name: str, quantum: Optional[int] = None, max_ticks: Optional[int] = None) -> Scheduler:
    """
    Build the named scheduler. The quantum is only used by round-robin.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    cls = ALGORITHMS[key]
    if key in QUANTUM_ALGORITHMS:
        return cls(quantum, max_ticks=max_ticks)
    return cls(max_ticks=max_ticks)


def run_algorithm(
    name: str,
    processes: Iterable[Process],
    quantum: Optional[int] = None,
    max_ticks: Optional[int] = None,
) -> ScheduleResult:
    return make_scheduler(name, quantum=quantum, max_ticks=max_ticks).simulate(processes)
