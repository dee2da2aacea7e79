"""Runtime helpers for driving the falling sand simulation from a host loop."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from dataclasses_json import dataclass_json

from .config import DEFAULT_HEIGHT
from .config import DEFAULT_WIDTH
from .config import SimulationConfig
from .logic import Coordinate
from .logic import Element
from .logic import Grid
from .logic import NOTHING
from .logic import RuleParameters
from .logic import WATER
from .logic import _default_logger
from .logic import element_by_name
from .logic.rules import DEFAULT_DIFFUSION_RATE
from .logic.rules import DEFAULT_DISPERSION_RATE
from .logic.rules import DEFAULT_FIRE_RISE_PROBABILITY


ElementLike = Union[Element, str]


@dataclass_json
@dataclass(frozen=True)
class SimulationGrid:
    """Dataclass describing the grid dimensions used for rendering."""

    width: int
    height: int


@dataclass_json
@dataclass(frozen=True)
class SimulationSnapshot:
    """Serializable view of the current simulation state."""

    grid: SimulationGrid
    tick: int
    cells: List[List[str]]
    population: Dict[str, int]


class SandSimulation:
    """Owns a grid and advances it once per host frame."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        random_seed: Optional[int] = None,
        dispersion_rate: int = DEFAULT_DISPERSION_RATE,
        diffusion_rate: float = DEFAULT_DIFFUSION_RATE,
        fire_rise_probability: float = DEFAULT_FIRE_RISE_PROBABILITY,
        generator_material: ElementLike = WATER,
        log_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._log = log_callback or _default_logger
        self._rng = random.Random(random_seed)
        parameters = RuleParameters(
            dispersion_rate=dispersion_rate,
            diffusion_rate=diffusion_rate,
            fire_rise_probability=fire_rise_probability,
            generator_material=_resolve_element(generator_material),
        )
        self._grid = Grid(
            width,
            height,
            rng=self._rng,
            parameters=parameters,
            log_callback=self._log,
        )
        self._tick = 0

        self._log(
            f"Initialized sand simulation on {width}x{height} grid "
            f"(dispersion {dispersion_rate}, diffusion {diffusion_rate})"
        )

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        log_callback: Optional[Callable[[str], None]] = None,
    ) -> "SandSimulation":
        """Build a simulation from a loaded configuration."""

        return cls(
            config.width,
            config.height,
            random_seed=config.random_seed,
            dispersion_rate=config.dispersion_rate,
            diffusion_rate=config.diffusion_rate,
            fire_rise_probability=config.fire_rise_probability,
            generator_material=config.generator_material,
            log_callback=log_callback,
        )

    @property
    def grid(self) -> Grid:
        """Expose the underlying grid for display collaborators."""

        return self._grid

    @property
    def tick(self) -> int:
        return self._tick

    def paint(self, x: int, y: int, element: ElementLike) -> bool:
        """Place an element on a cell; returns False when the cell is off-grid."""

        resolved = _resolve_element(element)
        if not self._grid.is_within_bounds(x, y):
            self._log(f"[sandbox-info] Ignored paint of {resolved.name} outside grid at ({x}, {y})")
            return False
        self._grid.set(x, y, resolved)
        return True

    def erase(self, x: int, y: int) -> bool:
        return self.paint(x, y, NOTHING)

    def paint_line(self, start: Coordinate, end: Coordinate, element: ElementLike) -> int:
        """Paint every cell between two points and return how many were on-grid."""

        resolved = _resolve_element(element)
        painted: List[Coordinate] = []

        def visit(x: int, y: int) -> None:
            if self._grid.is_within_bounds(x, y):
                self._grid.set(x, y, resolved)
                painted.append((x, y))

        self._grid.traverse_line(start, end, visit)
        return len(painted)

    def step(self) -> SimulationSnapshot:
        """Advance the simulation and return the resulting snapshot."""

        self._advance()
        return self.snapshot()

    def run(self, ticks: int) -> SimulationSnapshot:
        """Advance ``ticks`` times and return the final snapshot."""

        if isinstance(ticks, bool) or not isinstance(ticks, int) or ticks < 0:
            raise ValueError("ticks must be a non-negative integer")
        for _ in range(ticks):
            self._advance()
        return self.snapshot()

    def reset(self) -> None:
        """Clear the grid and restart the tick counter."""

        self._grid.reset()
        self._tick = 0
        self._log("Simulation reset")

    def population(self) -> Dict[str, int]:
        """Count non-background cells by element name."""

        return {
            element.name: count
            for element, count in self._grid.population().items()
        }

    def snapshot(self) -> SimulationSnapshot:
        """Return a serializable snapshot of the current grid."""

        return SimulationSnapshot(
            grid=SimulationGrid(width=self._grid.width, height=self._grid.height),
            tick=self._tick,
            cells=[[element.name for element in row] for row in self._grid.rows()],
            population=self.population(),
        )

    def _advance(self) -> None:
        self._grid.update()
        self._tick += 1
        self._log(f"Simulation tick advanced to {self._tick}")


def _resolve_element(element: ElementLike) -> Element:
    if isinstance(element, Element):
        return element
    if isinstance(element, str):
        return element_by_name(element)
    raise TypeError("element must be an Element instance or an element name")


__all__ = [
    "SandSimulation",
    "SimulationGrid",
    "SimulationSnapshot",
]
