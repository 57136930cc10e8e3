import json
from pathlib import Path

import pytest

from scheduling_sim.cli import build_parser, main


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(
        json.dumps(
            [
                {"pid": "P1", "arrival_time": 0, "burst_time": 5, "priority": 2},
                {"pid": "P2", "arrival_time": 1, "burst_time": 3, "priority": 1},
                {"pid": "P3", "arrival_time": 2, "burst_time": 8, "priority": 3},
            ]
        )
    )
    return p


def test_run_prints_report(workload, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Avg turnaround" in out


def test_run_round_robin_with_quantum(workload, capsys):
    assert main(["run", "-a", "rr", "-q", "2", "-w", str(workload)]) == 0
    assert "Quantum:" in capsys.readouterr().out


def test_run_round_robin_without_quantum_fails(workload):
    assert main(["run", "-a", "rr", "-w", str(workload)]) == 2


def test_compare(workload, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    assert main(["compare", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "SJF-Priority" in out


def test_missing_workload_file(tmp_path):
    assert main(["run", "-a", "sjf", "-w", str(tmp_path / "missing.json")]) == 2


def test_invalid_workload(tmp_path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,-1,3\n")
    assert main(["run", "-a", "sjf", "-w", str(p)]) == 2


def test_unknown_algorithm_is_a_usage_error():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["run", "-a", "lottery", "-w", "x.json"])


def test_malformed_json_workload_exits_with_error(tmp_path):
    p = tmp_path / "w.json"
    p.write_text("[{not json")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2


def test_undecodable_csv_workload_exits_with_error(tmp_path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"\xff\xfe")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2


def test_run_plain_gantt(workload, capsys):
    assert main(["run", "-a", "sjf", "--plain", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert "|================|" in out
