from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimeSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _ordered(slices: Sequence[TimeSlice]) -> List[TimeSlice]:
    return sorted(slices, key=lambda s: (s.start, s.stop))


def _segments(slices: Sequence[TimeSlice]) -> Iterator[Tuple[int, TimeSlice, int, int]]:
    """
    Yield ``(idle_gap, slice, width, mark)`` for each slice that is still
    visible once earlier slices are drawn.

    FCFS does not model arrival gaps, so its slices may overlap. An
    overlapping slice is clipped to the part after the previous one and a
    fully covered slice is skipped, which keeps the time marks increasing.
    """
    last_time = 0
    for sl in _ordered(slices):
        drawn_start = max(sl.start, last_time)
        width = sl.stop - drawn_start
        if width <= 0:
            continue
        yield drawn_start - last_time, sl, width, sl.stop
        last_time = sl.stop


def render_gantt(slices: Sequence[TimeSlice]) -> str:
    """
    Plain-text Gantt chart, for writing to any text stream.

    Idle gaps are drawn with dots.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0

    for idle_gap, sl, width, mark in _segments(slices):
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            time_marks += f"{last_time + idle_gap:>3}"

        line += "=" * width
        labels += str(sl.pid)[:width].ljust(width)
        time_marks += f"{mark:>3}"
        last_time = mark

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(slices: Sequence[TimeSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for idle_gap, sl, width, mark in _segments(slices):
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            time_marks += f"{last_time + idle_gap:>3}"

        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(str(sl.pid)[:width].ljust(width), style="bold")
        time_marks += f"{mark:>3}"
        last_time = mark

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), time_marks
