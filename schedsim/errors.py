from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """Raised when a process set (or run parameter) cannot be scheduled."""


def validate_processes(processes: Sequence[Process]) -> List[Process]:
    """
    Check the preconditions shared by every scheduler and return the
    processes as a list.

    Rejects empty input, duplicate PIDs, negative arrival times and
    non-positive burst times.
    """
    procs = list(processes)
    if not procs:
        raise InvalidInput("No processes to schedule")

    seen: set[str] = set()
    for p in procs:
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id '{p.pid}'")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise InvalidInput(f"Process {p.pid}: arrival time must be >= 0 (got {p.arrival_time})")
        if p.burst_time <= 0:
            raise InvalidInput(f"Process {p.pid}: burst time must be > 0 (got {p.burst_time})")

    logger.debug("Validated %d processes", len(procs))
    return procs


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or quantum <= 0:
        raise InvalidInput("Round Robin requires a positive quantum (use --quantum)")
    return quantum
