from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, List, Mapping

from .errors import InvalidInput
from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Only the file format is checked here; scheduling preconditions are
    enforced by the schedulers themselves.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidInput(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"{path}: not valid UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise InvalidInput(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return [_process_from_mapping(row) for row in csv.DictReader(f)]
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"{path}: not valid UTF-8") from exc


def _as_int(value: Any, name: str) -> int:
    # JSON gives bools and floats; CSV gives strings, which int() parses strictly.
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"{name} must be an integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be an integer, got {value!r}") from exc


def _process_from_mapping(mapping: Mapping[str, Any]) -> Process:
    try:
        raw_pid = mapping["pid"]
        raw_arrival = mapping["arrival_time"]
        raw_burst = mapping["burst_time"]
        priority_val = mapping.get("priority")
    except (AttributeError, KeyError, TypeError) as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    pid = "" if raw_pid is None else str(raw_pid).strip()
    if not pid:
        raise InvalidInput(f"Process id is missing or blank: {mapping!r}")

    return Process(
        pid=pid,
        arrival_time=_as_int(raw_arrival, f"{pid}: arrival_time"),
        burst_time=_as_int(raw_burst, f"{pid}: burst_time"),
        priority=_as_int(priority_val, f"{pid}: priority") if priority_val not in (None, "") else 0,
    )
