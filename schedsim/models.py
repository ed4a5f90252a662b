from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    """
    Immutable process descriptor. Lower priority value means higher priority.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class ProcessState:
    """
    Mutable per-run simulation state, kept in a list parallel to the
    descriptors so the descriptors themselves can be reused across runs.
    """

    remaining: int
    completed: bool = False
    waiting_time: int = 0
    turnaround_time: int = 0


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: str
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class SystemMetrics:
    avg_waiting: float
    avg_turnaround: float
    throughput: float
    makespan: int = 0
    cpu_busy_time: int = 0
    cpu_utilization: float = 0.0


@dataclass
class ScheduleResult:
    algorithm: str
    title: str
    quantum: Optional[int] = None
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
