"""
Ready-set selection rules shared by the simulation drivers.

These helpers never advance the clock; they only decide which process is
eligible or next at the given time.
"""

from __future__ import annotations

from typing import Deque, List, Optional, Sequence

from .models import Process


def sort_by_arrival(processes: Sequence[Process]) -> List[Process]:
    # sorted() is stable, so equal arrivals keep the caller's order.
    return sorted(processes, key=lambda p: p.arrival_time)


def find_shortest_job(pool: Sequence[Process], clock: int) -> Optional[Process]:
    """
    Return the arrived process with the smallest burst, or None if nothing
    has arrived by ``clock``.

    ``pool`` must be sorted by arrival time. Ties go to the first process
    encountered in pool order.
    """
    shortest: Optional[Process] = None
    for p in pool:
        if p.arrival_time > clock:
            break
        if shortest is None or p.burst_time < shortest.burst_time:
            shortest = p
    return shortest


def refresh_waiting_set(
    waiting: List[Process],
    processes: Sequence[Process],
    clock: int,
    active: Optional[Process] = None,
) -> List[Process]:
    """
    Add every arrived, unfinished, inactive process to ``waiting`` (at most
    once each) and return it sorted by remaining burst, insertion order on
    ties.
    """
    present = {id(p) for p in waiting}
    for p in processes:
        if p.completed or p is active or id(p) in present:
            continue
        if p.arrival_time <= clock:
            waiting.append(p)
            present.add(id(p))

    waiting.sort(key=lambda p: p.remaining_burst)
    return waiting


def admit_arrivals(pending: Deque[Process], ready: Deque[Process], clock: int) -> int:
    """
    Move processes that have arrived by ``clock`` from the head of
    ``pending`` (arrival-sorted) to the tail of ``ready``. Returns how many
    were admitted.
    """
    admitted = 0
    while pending and pending[0].arrival_time <= clock:
        ready.append(pending.popleft())
        admitted += 1
    return admitted
