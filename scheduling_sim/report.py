from __future__ import annotations

from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize
from .models import ScheduleResult

SCHEDULE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def schedule_rows(result: ScheduleResult) -> List[List[str]]:
    """
    One row per process, in the order the batch was supplied.
    """
    return [
        [
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        ]
        for p in result.processes
    ]


def build_schedule_table(result: ScheduleResult) -> Table:
    table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in SCHEDULE_HEADERS:
        table.add_column(h, justify="center" if h in {"ID", "Priority"} else "right")

    for row in schedule_rows(result):
        table.add_row(*row)
    return table


def build_stats_table(result: ScheduleResult) -> Table:
    stats = result.stats
    table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Avg waiting", f"{stats.avg_waiting:.2f}")
    table.add_row("Avg turnaround", f"{stats.avg_turnaround:.2f}")
    table.add_row("Throughput (proc/time)", f"{stats.throughput:.2f}")
    table.add_row("Elapsed", str(stats.elapsed))
    if result.timeline:
        table.add_row("CPU utilization", f"{stats.cpu_utilization * 100:.1f}%")
    return table


def build_comparison_table(results: Sequence[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")

    for row in summarize(results):
        table.add_row(
            row["algorithm"],
            "" if row["quantum"] is None else str(row["quantum"]),
            f"{row['avg_waiting']:.2f}",
            f"{row['avg_turnaround']:.2f}",
            f"{row['throughput']:.2f}",
        )
    return table


def print_report(
    result: ScheduleResult,
    title: Optional[str] = None,
    console: Optional[Console] = None,
    plain_gantt: bool = False,
) -> None:
    """
    Write the title, Gantt chart, per-process table and statistics.

    Pass ``Console(file=stream)`` to write to an arbitrary text stream, and
    ``plain_gantt=True`` to draw the chart with ASCII characters only.
    """
    console = console or Console()

    console.rule(f"[bold]{title or result.algorithm}[/bold]")
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    console.print()

    if plain_gantt:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
    console.print()

    console.print(build_schedule_table(result))
    console.print()
    console.print(build_stats_table(result))
