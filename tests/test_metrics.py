import math

import pytest

from scheduling_sim.algorithms import run_algorithm
from scheduling_sim.metrics import compute_statistics, summarize
from scheduling_sim.models import Process, TimeSlice


def _finished(pid, arrival, burst, completion):
    p = Process(pid, arrival_time=arrival, burst_time=burst)
    turnaround = completion - arrival
    p.finish(completion, turnaround, turnaround - burst)
    return p


def test_compute_statistics():
    procs = [_finished("A", 0, 5, 5), _finished("B", 0, 3, 8)]
    timeline = [TimeSlice("A", 0, 5), TimeSlice("B", 5, 8)]
    stats = compute_statistics(procs, 8, timeline)

    assert stats.avg_waiting == pytest.approx(2.5)
    assert stats.avg_turnaround == pytest.approx(6.5)
    assert stats.throughput == pytest.approx(0.25)
    assert stats.cpu_busy_time == 8
    assert stats.cpu_utilization == pytest.approx(1.0)


def test_compute_statistics_empty_is_nan():
    stats = compute_statistics([], 0)
    assert math.isnan(stats.avg_waiting)
    assert math.isnan(stats.avg_turnaround)
    assert math.isnan(stats.throughput)


def test_compute_statistics_without_timeline():
    stats = compute_statistics([_finished("A", 2, 1, 3)], 3)
    assert stats.cpu_busy_time == 0
    assert stats.throughput == pytest.approx(1 / 3)


def test_summarize():
    procs = [Process("A", 0, 4), Process("B", 1, 2)]
    results = [run_algorithm("fcfs", procs), run_algorithm("rr", procs, quantum=2)]
    rows = summarize(results)
    assert [r["algorithm"] for r in rows] == ["FCFS", "Round Robin"]
    assert rows[0]["quantum"] is None
    assert rows[1]["quantum"] == 2
    assert rows[0]["avg_waiting"] == results[0].stats.avg_waiting
