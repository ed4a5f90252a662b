import json
from pathlib import Path

import pytest

from schedsim.errors import InvalidInput
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert procs[0] == Process("A", arrival_time=0, burst_time=3, priority=1)
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert [x.pid for x in procs] == ["A", "B"]
    assert procs[0].priority == 1
    assert procs[1].priority == 0


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(InvalidInput):
        load_workload(p)


@pytest.mark.parametrize(
    "content",
    [
        '{"pid": "A"}',
        '[{"pid": "A", "burst_time": 3}]',
        '[{"pid": "A", "arrival_time": "soon", "burst_time": 3}]',
        '[1, 2]',
        '[{"pid": "A", ',
    ],
)
def test_bad_json_entries(tmp_path: Path, content):
    p = tmp_path / "bad.json"
    p.write_text(content)
    with pytest.raises(InvalidInput):
        load_workload(p)


@pytest.mark.parametrize(
    "content",
    [
        "pid,arrival_time\nA,0\n",
        "pid,arrival_time,burst_time\nA,zero,3\n",
        "pid,arrival_time,burst_time\nA,0,2.5\n",
        "pid,arrival_time,burst_time\nA,0\n",
        "pid,arrival_time,burst_time\n,0,3\n",
    ],
)
def test_bad_csv_entries(tmp_path: Path, content):
    p = tmp_path / "bad.csv"
    p.write_text(content)
    with pytest.raises(InvalidInput):
        load_workload(p)


@pytest.mark.parametrize("suffix", [".csv", ".json"])
def test_invalid_utf8_rejected(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"pid,arrival_time,burst_time\n\xff\xfe,0,3\n")
    with pytest.raises(InvalidInput, match="UTF-8"):
        load_workload(p)


@pytest.mark.parametrize(
    "entry",
    [
        {"pid": "A", "arrival_time": 0.9, "burst_time": 2},
        {"pid": "A", "arrival_time": 0, "burst_time": 2.7},
        {"pid": "A", "arrival_time": True, "burst_time": 2},
        {"pid": "A", "arrival_time": 0, "burst_time": 2, "priority": False},
        {"pid": "A", "arrival_time": 0, "burst_time": 2, "priority": 1.5},
    ],
)
def test_non_integer_times_rejected(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([entry]))
    with pytest.raises(InvalidInput, match="must be an integer"):
        load_workload(p)


def test_integral_floats_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": "A", "arrival_time": 1.0, "burst_time": 3.0, "priority": 2.0}]')
    assert load_workload(p) == [Process("A", arrival_time=1, burst_time=3, priority=2)]


@pytest.mark.parametrize("pid", [None, "", "   "])
def test_missing_or_blank_pid_rejected(tmp_path: Path, pid):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([{"pid": pid, "arrival_time": 0, "burst_time": 2}]))
    with pytest.raises(InvalidInput, match="missing or blank"):
        load_workload(p)
