from __future__ import annotations

from typing import IO, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .models import ScheduleResult

ROW_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def make_console(file: Optional[IO[str]] = None) -> Console:
    # Wide enough that the tables never wrap when writing to a file.
    if file is None:
        return Console()
    return Console(file=file, width=120)


def build_process_table(result: ScheduleResult) -> Table:
    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY)
    for h in ROW_HEADERS:
        table.add_column(h, justify="center" if h == "ID" else "right")

    for row in result.processes:
        table.add_row(
            row.pid,
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.waiting_time),
            str(row.turnaround_time),
            str(row.completion_time),
        )
    return table


def build_system_table(result: ScheduleResult) -> Table:
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    system = result.system
    if system is None:
        return sys_table

    sys_table.add_row("Average wait", f"{system.avg_waiting:.2f}")
    sys_table.add_row("Average turnaround", f"{system.avg_turnaround:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.2f}")
    sys_table.add_row("Makespan", str(system.makespan))
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization * 100:.1f}%")
    return sys_table


def print_result(
    result: ScheduleResult, file: Optional[IO[str]] = None, plain_gantt: bool = False
) -> None:
    """
    Render one run: title, Gantt chart, per-process table and aggregates.

    With ``plain_gantt`` the chart is drawn in plain ASCII instead of a
    colored panel, which survives copy/paste into text files.
    """
    console = make_console(file)

    console.rule(f"[bold]{result.title}[/bold]")
    if result.title != result.algorithm:
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
            console.print(time_marks, highlight=False)
    console.print()

    console.print(build_process_table(result))
    console.print(build_system_table(result))


def print_comparison(results: List[ScheduleResult], file: Optional[IO[str]] = None) -> None:
    console = make_console(file)

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg wait", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for result in results:
        system = result.system
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{system.avg_waiting:.2f}" if system else "",
            f"{system.avg_turnaround:.2f}" if system else "",
            f"{system.throughput:.3f}" if system else "",
        )

    console.print(summary_table)
