"""Tests for the headless command line runner."""

from __future__ import annotations

import json
import logging

import pytest

from sandbox.main import EXIT_CONFIG_ERROR
from sandbox.main import EXIT_OK
from sandbox.main import build_config
from sandbox.main import main
from sandbox.main import parse_arguments


def test_list_elements_prints_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list-elements"]) == EXIT_OK

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 9
    assert json.loads(lines[0])["name"] == "Air"
    assert {json.loads(line)["name"] for line in lines} >= {"Sand", "Water", "Maze"}


def test_run_prints_final_snapshot(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        [
            "--width", "5",
            "--height", "5",
            "--ticks", "4",
            "--seed", "3",
            "--paint", "sand", "2", "0",
            "--report-interval", "0",
            "--json",
        ]
    )

    assert exit_code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["tick"] == 4
    assert payload["population"] == {"Sand": 1}
    assert payload["cells"][4][2] == "Sand"


def test_line_command_paints_cells(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        ["--width", "5", "--height", "3", "--ticks", "0", "--line", "stone", "0", "2", "4", "2", "--json"]
    )

    assert exit_code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["population"] == {"Stone": 5}


def test_population_is_reported_at_interval(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="sandbox.main"):
        exit_code = main(
            ["--width", "3", "--height", "3", "--ticks", "4", "--report-interval", "2", "--paint", "stone", "1", "1"]
        )

    assert exit_code == EXIT_OK
    reports = [record.getMessage() for record in caplog.records if "Stone=1" in record.getMessage()]
    assert reports == ["Tick 2: Stone=1", "Tick 4: Stone=1"]


def test_missing_config_file_returns_error(tmp_path) -> None:
    assert main(["--config", str(tmp_path / "missing.json"), "--ticks", "1"]) == EXIT_CONFIG_ERROR


def test_unknown_element_returns_error() -> None:
    assert main(["--width", "3", "--height", "3", "--paint", "lava", "0", "0"]) == EXIT_CONFIG_ERROR


def test_non_integer_coordinate_returns_error() -> None:
    assert main(["--width", "3", "--height", "3", "--paint", "sand", "x", "0"]) == EXIT_CONFIG_ERROR


def test_command_line_overrides_config(tmp_path) -> None:
    config_path = tmp_path / "sandbox.json"
    config_path.write_text(json.dumps({"width": 20, "height": 10, "dispersion_rate": 2}), encoding="utf-8")

    config = build_config(parse_arguments(["--config", str(config_path), "--width", "9", "--seed", "4"]))

    assert config.width == 9
    assert config.height == 10
    assert config.random_seed == 4
    assert config.dispersion_rate == 2
