"""
schedsim package.

Simulates classic single-processor CPU scheduling algorithms (FCFS, SJF,
SJF with priority tie-break, Round Robin) over a static list of processes
and reports waiting time, turnaround time and throughput.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .errors import InvalidInput
from .models import Process, ScheduleResult

__all__ = ["ALGORITHMS", "InvalidInput", "Process", "ScheduleResult", "run_algorithm"]
