from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from .errors import validate_processes, validate_quantum
from .metrics import compute_system_metrics
from .models import Process, ProcessMetrics, ProcessState, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def _row(p: Process, state: ProcessState, completion_time: int) -> ProcessMetrics:
    return ProcessMetrics(
        pid=p.pid,
        priority=p.priority,
        burst_time=p.burst_time,
        arrival_time=p.arrival_time,
        waiting_time=state.waiting_time,
        turnaround_time=state.turnaround_time,
        completion_time=completion_time,
    )


def _finish(
    algorithm: str,
    title: Optional[str],
    quantum: Optional[int],
    metrics: List[ProcessMetrics],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        title=title or algorithm,
        quantum=quantum,
        processes=metrics,
        timeline=timeline,
    )
    compute_system_metrics(result)
    return result


def schedule_fcfs(
    processes: Sequence[Process], quantum: Optional[int] = None, title: Optional[str] = None
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run strictly in the order given; the list is not re-sorted by
    arrival time. A process that arrives after the CPU frees up waits 0 and
    the CPU idles until it arrives.
    """
    procs = validate_processes(processes)
    states = [ProcessState(remaining=p.burst_time) for p in procs]

    service_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p, state in zip(procs, states):
        state.waiting_time = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + state.waiting_time
        completion_time = start_time + p.burst_time
        state.turnaround_time = p.burst_time + state.waiting_time
        state.remaining = 0
        state.completed = True

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=completion_time))
        metrics.append(_row(p, state, completion_time))

        service_time = completion_time

    return _finish("FCFS", title, None, metrics, timeline)


def schedule_sjf(
    processes: Sequence[Process], quantum: Optional[int] = None, title: Optional[str] = None
) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive, static order).

    The whole set is sorted once by burst time (stable, so equal bursts keep
    their input order) and then executed back to back. Arrival times do not
    gate the order: if a shorter job has not arrived yet, the CPU idles until
    it does, even when a longer job is already waiting. Use
    :func:`schedule_sjf_priority` for the arrival-aware policy.
    """
    procs = sorted(validate_processes(processes), key=lambda p: p.burst_time)
    states = [ProcessState(remaining=p.burst_time) for p in procs]

    current_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p, state in zip(procs, states):
        state.waiting_time = max(0, current_time - p.arrival_time)
        current_time = max(current_time, p.arrival_time) + p.burst_time
        state.turnaround_time = current_time - p.arrival_time
        state.remaining = 0
        state.completed = True

        timeline.append(
            ScheduledSlice(pid=p.pid, start_time=current_time - p.burst_time, end_time=current_time)
        )
        metrics.append(_row(p, state, current_time))

    return _finish("SJF (static)", title, None, metrics, timeline)


def schedule_sjf_priority(
    processes: Sequence[Process], quantum: Optional[int] = None, title: Optional[str] = None
) -> ScheduleResult:
    """
    Arrival-aware Shortest Job First with priority tie-break (non-preemptive).

    Processes are admitted into a ready heap as the clock passes their
    arrival time. At each decision point the heap yields the ready process
    with the smallest burst; ties go to the smallest priority value, then to
    the earliest arrival (input order among equal arrivals). When nothing is
    ready the clock jumps straight to the next arrival.
    """
    procs = validate_processes(processes)
    states = [ProcessState(remaining=p.burst_time) for p in procs]
    # Stable: equal arrivals keep input order.
    by_arrival = sorted(range(len(procs)), key=lambda i: procs[i].arrival_time)

    ready: List[Tuple[int, int, int]] = []  # (burst, priority, arrival rank)
    admitted = 0
    completed = 0
    current_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    while completed < len(procs):
        while admitted < len(by_arrival) and procs[by_arrival[admitted]].arrival_time <= current_time:
            p = procs[by_arrival[admitted]]
            heapq.heappush(ready, (p.burst_time, p.priority, admitted))
            admitted += 1

        if not ready:
            next_arrival = procs[by_arrival[admitted]].arrival_time
            logger.debug("CPU idle from %d to %d", current_time, next_arrival)
            current_time = next_arrival
            continue

        _, _, rank = heapq.heappop(ready)
        idx = by_arrival[rank]
        p, state = procs[idx], states[idx]

        state.waiting_time = current_time - p.arrival_time
        state.turnaround_time = state.waiting_time + p.burst_time
        state.remaining = 0
        state.completed = True
        completed += 1

        start_time = current_time
        current_time += p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=current_time))
        metrics.append(_row(p, state, current_time))
        logger.info(
            "Process %s completed at %d, wait %d, turnaround %d",
            p.pid,
            current_time,
            state.waiting_time,
            state.turnaround_time,
        )

    return _finish("SJF (priority)", title, None, metrics, timeline)


def schedule_rr(
    processes: Sequence[Process], quantum: Optional[int] = None, title: Optional[str] = None
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs join the ready queue before the
    preempted process is put back at the tail. Rows are reported in
    completion order.
    """
    procs = validate_processes(processes)
    quantum = validate_quantum(quantum)
    states = [ProcessState(remaining=p.burst_time) for p in procs]
    by_arrival = sorted(range(len(procs)), key=lambda i: procs[i].arrival_time)

    time = 0
    admitted = 0
    ready: Deque[int] = deque()
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal admitted
        while admitted < len(by_arrival) and procs[by_arrival[admitted]].arrival_time <= current_time:
            ready.append(by_arrival[admitted])
            admitted += 1

    enqueue_new_arrivals(time)

    while ready or admitted < len(by_arrival):
        if not ready:
            # Jump to next arrival if CPU is idle
            next_arrival = procs[by_arrival[admitted]].arrival_time
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            enqueue_new_arrivals(time)
            continue

        idx = ready.popleft()
        p, state = procs[idx], states[idx]

        run_time = min(quantum, state.remaining)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time))
        time += run_time
        state.remaining -= run_time

        enqueue_new_arrivals(time)

        if state.remaining > 0:
            ready.append(idx)
            continue

        state.completed = True
        state.turnaround_time = time - p.arrival_time
        state.waiting_time = state.turnaround_time - p.burst_time
        metrics.append(_row(p, state, time))
        logger.debug("Process %s completed at %d", p.pid, time)

    return _finish("Round Robin", title, quantum, metrics, timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "sjf-priority": schedule_sjf_priority,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    title: Optional[str] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}'")

    func = ALGORITHMS[name]
    logger.debug("Running %s on %d processes", name, len(processes))
    return func(processes, quantum=quantum, title=title)
