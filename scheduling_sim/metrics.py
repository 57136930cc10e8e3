from __future__ import annotations

import math
from typing import Dict, List, Sequence

from .models import Process, ScheduleResult, ScheduleStats, TimeSlice


def compute_statistics(
    processes: Sequence[Process],
    elapsed: int,
    timeline: Sequence[TimeSlice] = (),
) -> ScheduleStats:
    """
    Average waiting/turnaround and throughput over completed processes.

    An empty batch or a zero elapsed time yields NaN; drivers reject empty
    batches before they get here.
    """
    n = len(processes)
    if n == 0:
        nan = math.nan
        return ScheduleStats(avg_waiting=nan, avg_turnaround=nan, throughput=nan, elapsed=elapsed)

    total_waiting = sum(p.waiting_time for p in processes)
    total_turnaround = sum(p.turnaround_time for p in processes)
    cpu_busy_time = sum(slice_.length for slice_ in timeline)

    throughput = n / elapsed if elapsed > 0 else math.nan
    cpu_utilization = cpu_busy_time / elapsed if elapsed > 0 else 0.0

    return ScheduleStats(
        avg_waiting=total_waiting / n,
        avg_turnaround=total_turnaround / n,
        throughput=throughput,
        elapsed=elapsed,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_utilization,
    )


def summarize(results: Sequence[ScheduleResult]) -> List[Dict[str, object]]:
    """
    Return one row of headline numbers per result for quick comparison.
    """
    rows: List[Dict[str, object]] = []
    for result in results:
        stats = result.stats
        rows.append(
            {
                "algorithm": result.algorithm,
                "quantum": result.quantum,
                "avg_waiting": stats.avg_waiting,
                "avg_turnaround": stats.avg_turnaround,
                "throughput": stats.throughput,
                "elapsed": stats.elapsed,
            }
        )
    return rows
