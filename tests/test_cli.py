"""Tests for the command-line entry point."""

import sys

import orjson

import main


def test_headless_run_exports_stats(tmp_path, monkeypatch):
    out = tmp_path / "run.json"
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--headless", "--max-ticks", "30", "--stats-interval", "10", "--seed", "5",
         "--export-stats", str(out)],
    )

    main.main()

    payload = orjson.loads(out.read_bytes())
    assert payload["seed"] == 5
    assert payload["stats"]["tick"] == 30
    assert payload["history"]["ticks"] == [10, 20, 30]
    assert payload["params"]["initialUrchins"] == 30
