from __future__ import annotations

import json

import pytest

import project_config
from tools.cli.find_fish import main

FISH_CELLS = {(2, 3), (2, 8), (5, 3), (5, 8)}


def _token(row: int, column: int) -> str:
    if (row, column) in FISH_CELLS:
        return "78"
    if (row, column) == (0, 3):
        return "79"
    return "12"


XWING_CSV = ",".join(_token(r, c) for r in range(9) for c in range(9))


def _write_grid(tmp_path, text: str):
    path = tmp_path / "grid.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_find_reports_step(tmp_path, capsys):
    grid = tmp_path / "grid.json"
    grid.write_text(json.dumps({"format": "csv", "grid": XWING_CSV}), encoding="utf-8")

    assert main(["find", str(grid), "--size", "2"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["found"] is True
    assert payload["digit"] == 7
    assert payload["removals"] == [[0, 3]]


def test_find_without_fish(tmp_path, capsys):
    path = _write_grid(tmp_path, "." * 81)

    assert main(["find", str(path), "--size", "3"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"found": False, "message": "This puzzle does not contain a swordfish."}


def test_solve_writes_event_log(tmp_path, capsys):
    path = _write_grid(tmp_path, XWING_CSV)
    log_dir = tmp_path / "logs"

    assert main(["solve", str(path), "--sizes", "2,3", "--log-dir", str(log_dir)]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["steps"] == 1
    assert summary["candidates_after"] == summary["candidates_before"] - 1
    events = list(log_dir.glob("*/fish_*.jsonl"))
    assert len(events) == 1
    assert json.loads(events[0].read_text("utf-8").splitlines()[0])["event"] == "fish.step"


def test_invalid_fish_size_exits(tmp_path):
    path = _write_grid(tmp_path, "." * 81)
    with pytest.raises(SystemExit, match="invalid fish size"):
        main(["find", str(path), "--size", "1"])


def test_solve_without_config_file(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(project_config, "_config_path", lambda: tmp_path / "missing.toml")
    project_config.get_config.cache_clear()
    path = _write_grid(tmp_path, XWING_CSV)
    try:
        assert main(["solve", str(path)]) == 0
    finally:
        project_config.get_config.cache_clear()

    summary = json.loads(capsys.readouterr().out)
    assert summary["steps"] == 1
    assert "+9" in summary["grid"].split(",")
