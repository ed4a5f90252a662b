from __future__ import annotations

from .models import ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute average waiting/turnaround time, throughput and CPU utilization
    from the populated per-process rows and timeline slices.

    Throughput is processes completed per unit time up to the last
    completion.
    """
    if not result.processes:
        system = SystemMetrics(avg_waiting=0.0, avg_turnaround=0.0, throughput=0.0)
        result.system = system
        return system

    n = len(result.processes)
    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.duration for slice_ in result.timeline)

    system = SystemMetrics(
        avg_waiting=sum(p.waiting_time for p in result.processes) / n,
        avg_turnaround=sum(p.turnaround_time for p in result.processes) / n,
        throughput=n / makespan if makespan > 0 else 0.0,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.system = system
    return system
