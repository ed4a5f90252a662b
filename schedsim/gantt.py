from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# Panel border plus left padding sit in front of the first bar cell.
PANEL_LEAD = 2

# (pid or None for idle, start, end)
Bar = Tuple[Optional[str], int, int]


def iter_bars(slices: List[ScheduledSlice]) -> Iterator[Bar]:
    """
    Walk the slices in start order, yielding idle gaps as bars with no pid.
    """
    last_time = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            yield None, last_time, sl.start_time
        yield sl.pid, sl.start_time, sl.end_time
        last_time = sl.end_time


def _label(pid: str, width: int) -> str:
    return pid[:width].center(width)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: a bar line, a label line and a time axis.
    Idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    time_marks = "0"

    for pid, start, end in iter_bars(slices):
        width = max(1, end - start)
        if pid is None:
            bar += "." * width + "|"
            labels += " " * (width + 1)
        else:
            bar += "=" * width + "|"
            labels += _label(pid, width) + " "
        time_marks += f"{end:>{width + 1}}"

    return "\n".join(["Gantt Chart:", bar, labels.rstrip(), time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[str, str] = {}
    timeline = Text()
    labels = Text()
    time_marks = " " * PANEL_LEAD + "0"
    column = PANEL_LEAD

    for pid, start, end in iter_bars(slices):
        width = max(1, end - start)
        if pid is None:
            timeline.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            color = pid_to_color.setdefault(pid, COLORS[len(pid_to_color) % len(COLORS)])
            timeline.append(" " * width, style=f"on {color}")
            labels.append(_label(pid, width), style="bold")
        column += width

        # Right-align the mark under the bar's last cell; drop it if it would
        # run into the previous mark.
        mark = str(end)
        mark_start = column - len(mark)
        if mark_start > len(time_marks):
            time_marks = time_marks.ljust(mark_start) + mark

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), time_marks
