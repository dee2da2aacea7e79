"""Tests for the sand simulation runtime helpers."""

from __future__ import annotations

import json

import pytest

from sandbox.config import SimulationConfig
from sandbox.logic import FAUCET
from sandbox.logic import SAND
from sandbox.logic import STONE
from sandbox.runtime import SandSimulation


def test_snapshot_serializes_to_json() -> None:
    simulation = SandSimulation(width=4, height=3, random_seed=42)
    simulation.paint(1, 0, SAND)

    payload = json.loads(simulation.snapshot().to_json())

    assert payload["grid"] == {"width": 4, "height": 3}
    assert payload["tick"] == 0
    assert payload["cells"][0] == ["Air", "Sand", "Air", "Air"]
    assert len(payload["cells"]) == 3
    assert payload["population"] == {"Sand": 1}


def test_step_advances_tick_and_logs() -> None:
    messages: list[str] = []
    simulation = SandSimulation(width=3, height=3, random_seed=1, log_callback=messages.append)
    simulation.paint(1, 0, "sand")

    snapshot = simulation.step()

    assert snapshot.tick == 1
    assert simulation.tick == 1
    assert snapshot.cells[1][1] == "Sand"
    assert any("Initialized sand simulation on 3x3 grid" in message for message in messages)
    assert "Simulation tick advanced to 1" in messages


def test_paint_outside_grid_is_ignored_and_logged() -> None:
    messages: list[str] = []
    simulation = SandSimulation(width=3, height=3, log_callback=messages.append)

    assert simulation.paint(5, 1, STONE) is False
    assert simulation.population() == {}
    assert any("[sandbox-info] Ignored paint of Stone" in message for message in messages)


def test_paint_rejects_unknown_elements() -> None:
    simulation = SandSimulation(width=3, height=3)

    with pytest.raises(ValueError):
        simulation.paint(0, 0, "Lava")
    with pytest.raises(TypeError):
        simulation.paint(0, 0, 7)  # type: ignore[arg-type]


def test_erase_clears_cell() -> None:
    simulation = SandSimulation(width=3, height=3)
    simulation.paint(2, 2, STONE)

    assert simulation.erase(2, 2) is True
    assert simulation.population() == {}


def test_paint_line_counts_on_grid_cells() -> None:
    simulation = SandSimulation(width=5, height=5)

    painted = simulation.paint_line((-2, 4), (2, 4), STONE)

    assert painted == 3
    assert simulation.population() == {"Stone": 3}
    assert simulation.snapshot().cells[4] == ["Stone", "Stone", "Stone", "Air", "Air"]


def test_reset_restores_fresh_state() -> None:
    simulation = SandSimulation(width=4, height=4, random_seed=5)
    fresh = simulation.snapshot()
    simulation.paint_line((0, 0), (3, 0), SAND)
    simulation.run(2)

    simulation.reset()

    assert simulation.tick == 0
    assert simulation.snapshot() == fresh


def test_run_advances_multiple_ticks() -> None:
    simulation = SandSimulation(width=1, height=6, random_seed=2)
    simulation.paint(0, 0, SAND)

    snapshot = simulation.run(3)

    assert snapshot.tick == 3
    assert snapshot.cells[3] == ["Sand"]
    with pytest.raises(ValueError):
        simulation.run(-1)


def test_identical_seeds_reproduce_runs() -> None:
    def build() -> SandSimulation:
        simulation = SandSimulation(width=12, height=8, random_seed=2024)
        simulation.paint_line((0, 7), (11, 7), STONE)
        simulation.paint_line((2, 0), (9, 0), "Water")
        simulation.paint_line((3, 1), (6, 1), SAND)
        simulation.paint(5, 6, "Steam")
        simulation.paint(1, 6, "Fire")
        return simulation

    first = build().run(15)
    second = build().run(15)

    assert first == second


def test_generator_adds_one_cell_per_tick() -> None:
    simulation = SandSimulation(width=3, height=6, random_seed=8)
    simulation.paint(1, 0, FAUCET)

    simulation.step()
    assert simulation.population() == {"Faucet": 1, "Water": 1}
    simulation.step()
    assert simulation.population() == {"Faucet": 1, "Water": 2}


def test_from_config_applies_settings() -> None:
    config = SimulationConfig(width=3, height=3, random_seed=4, generator_material="Sand")
    simulation = SandSimulation.from_config(config)
    simulation.paint(1, 0, FAUCET)

    snapshot = simulation.step()

    assert snapshot.grid.width == 3
    assert snapshot.cells[1][1] == "Sand"


def test_invalid_dimensions_raise() -> None:
    with pytest.raises(ValueError):
        SandSimulation(width=0, height=3)
    with pytest.raises(ValueError):
        SandSimulation(width=3, height=3, dispersion_rate=0)
