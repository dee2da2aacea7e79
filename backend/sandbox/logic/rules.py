"""Stepping rules and the category dispatcher used by the grid update pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .elements import BehaviorCategory
from .elements import Element
from .elements import MAZE
from .elements import NOTHING
from .elements import WATER

if TYPE_CHECKING:
    from .grid import Grid


DEFAULT_DISPERSION_RATE = 5
DEFAULT_DIFFUSION_RATE = 0.5
DEFAULT_FIRE_RISE_PROBABILITY = 0.7

# Lateral headings indexed by a single randrange(2) draw.
_LATERAL_HEADINGS: Tuple[int, int] = (-1, 1)

# Up, down, left, right.
VON_NEUMANN_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

# Rows top to bottom, columns left to right; birth order depends on it.
MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)

AUTOMATON_BIRTH_COUNT = 3
AUTOMATON_MIN_NEIGHBORS = 1
AUTOMATON_MAX_NEIGHBORS = 5


@dataclass(frozen=True)
class RuleParameters:
    """Per-use tuning shared by every rule invocation of a grid."""

    dispersion_rate: int = DEFAULT_DISPERSION_RATE
    diffusion_rate: float = DEFAULT_DIFFUSION_RATE
    fire_rise_probability: float = DEFAULT_FIRE_RISE_PROBABILITY
    generator_material: Element = WATER

    def __post_init__(self) -> None:
        if isinstance(self.dispersion_rate, bool) or not isinstance(self.dispersion_rate, int):
            raise TypeError("dispersion_rate must be an integer")
        if self.dispersion_rate < 1:
            raise ValueError("dispersion_rate must be at least 1")
        for field_name in ("diffusion_rate", "fire_rise_probability"):
            value = getattr(self, field_name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise TypeError(f"{field_name} must be numeric")
            if not 0 <= value <= 1:
                raise ValueError(f"{field_name} must be within the range [0, 1]")
        if not isinstance(self.generator_material, Element):
            raise TypeError("generator_material must be an Element")
        if self.generator_material.is_background:
            raise ValueError("generator_material must not be the background element")


StepRule = Callable[["Grid", int, int, RuleParameters], None]


def _is_liquid(element: Element) -> bool:
    return element.category is BehaviorCategory.LIQUID


def _disperse(grid: "Grid", x: int, y: int, distance: int) -> bool:
    """Move the cell sideways into the nearest background cell within range.

    The first side is drawn uniformly; the opposite side is only scanned when
    the first one has no background cell within ``distance``. Falling back to
    the other side is deliberate: a blocked column still levels out.
    """

    heading = _LATERAL_HEADINGS[grid.rng.randrange(2)]
    for direction in (heading, -heading):
        for offset in range(1, distance + 1):
            target_x = x + direction * offset
            if not grid.is_within_bounds(target_x, y):
                break
            if grid.is_empty(target_x, y):
                grid.move((x, y), (target_x, y))
                return True
    return False


def step_nothing(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Background cells never act."""

    return None


def step_immovable_solid(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Stay put unless a liquid below percolates up through the solid."""

    if _is_liquid(grid.get(x, y + 1)):
        grid.swap((x, y), (x, y + 1))


def step_movable_solid(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Fall, sink through liquid, or slide to a random free diagonal."""

    if grid.is_empty(x, y + 1):
        grid.move((x, y), (x, y + 1))
    elif _is_liquid(grid.get(x, y + 1)):
        grid.swap((x, y), (x, y + 1))
    else:
        options = [
            (target_x, y + 1)
            for target_x in (x - 1, x + 1)
            if grid.is_empty(target_x, y + 1)
        ]
        if options:
            grid.move((x, y), options[grid.rng.randrange(len(options))])


def step_liquid(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Fall when possible, otherwise flow sideways up to ``dispersion_rate`` cells."""

    if grid.is_empty(x, y + 1):
        grid.move((x, y), (x, y + 1))
        return
    _disperse(grid, x, y, parameters.dispersion_rate)


def step_gas(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Rise when possible; lateral spread is throttled by ``diffusion_rate``."""

    if grid.is_empty(x, y - 1):
        grid.move((x, y), (x, y - 1))
        return
    if grid.rng.random() < parameters.diffusion_rate:
        _disperse(grid, x, y, parameters.dispersion_rate)


def step_generator(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Emit one cell of the generator material into the empty cell below."""

    if grid.is_empty(x, y + 1):
        grid.set(x, y + 1, parameters.generator_material)


def step_destroyer(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Clear whatever touches the drain on its four sides."""

    for dx, dy in VON_NEUMANN_OFFSETS:
        neighbor = grid.get(x + dx, y + dy)
        if neighbor.is_background or neighbor.category is BehaviorCategory.DESTROYER:
            continue
        grid.set(x + dx, y + dy, NOTHING)


def count_automaton_neighbors(grid: "Grid", x: int, y: int) -> int:
    """Return how many of the eight surrounding cells hold automaton cells."""

    return sum(
        1
        for dx, dy in MOORE_OFFSETS
        if grid.get(x + dx, y + dy).category is BehaviorCategory.AUTOMATON
    )


def step_automaton(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Maze growth: births around the cell first, then its own survival check."""

    for dx, dy in MOORE_OFFSETS:
        neighbor_x, neighbor_y = x + dx, y + dy
        if not grid.is_within_bounds(neighbor_x, neighbor_y):
            continue
        if grid.get(neighbor_x, neighbor_y).category is BehaviorCategory.AUTOMATON:
            continue
        if count_automaton_neighbors(grid, neighbor_x, neighbor_y) == AUTOMATON_BIRTH_COUNT:
            grid.set(neighbor_x, neighbor_y, MAZE)

    if grid.get(x, y).category is not BehaviorCategory.AUTOMATON:
        return
    population = count_automaton_neighbors(grid, x, y)
    if population < AUTOMATON_MIN_NEIGHBORS or population > AUTOMATON_MAX_NEIGHBORS:
        grid.set(x, y, NOTHING)


def step_fire(grid: "Grid", x: int, y: int, parameters: RuleParameters) -> None:
    """Flicker upwards, drift sideways, or burn out."""

    if grid.is_empty(x, y - 1) and grid.rng.random() < parameters.fire_rise_probability:
        grid.move((x, y), (x, y - 1))
        return
    drift = grid.rng.randrange(3) - 1
    if drift and grid.is_empty(x + drift, y):
        grid.move((x, y), (x + drift, y))
        return
    grid.set(x, y, NOTHING)


_RULES: Dict[BehaviorCategory, StepRule] = {
    BehaviorCategory.BACKGROUND: step_nothing,
    BehaviorCategory.IMMOVABLE_SOLID: step_immovable_solid,
    BehaviorCategory.MOVABLE_SOLID: step_movable_solid,
    BehaviorCategory.LIQUID: step_liquid,
    BehaviorCategory.GAS: step_gas,
    BehaviorCategory.GENERATOR: step_generator,
    BehaviorCategory.DESTROYER: step_destroyer,
    BehaviorCategory.AUTOMATON: step_automaton,
    BehaviorCategory.FIRE: step_fire,
}


def rule_for(category: BehaviorCategory) -> StepRule:
    """Return the stepping rule for a category; unknown categories do nothing."""

    return _RULES.get(category, step_nothing)


def step_element(
    grid: "Grid",
    x: int,
    y: int,
    parameters: Optional[RuleParameters] = None,
) -> None:
    """Invoke the rule of whatever element currently occupies ``(x, y)``."""

    if not grid.is_within_bounds(x, y):
        return
    element = grid.get(x, y)
    rule = rule_for(element.category)
    rule(grid, x, y, parameters or grid.parameters)


__all__ = [
    "AUTOMATON_BIRTH_COUNT",
    "AUTOMATON_MAX_NEIGHBORS",
    "AUTOMATON_MIN_NEIGHBORS",
    "DEFAULT_DIFFUSION_RATE",
    "DEFAULT_DISPERSION_RATE",
    "DEFAULT_FIRE_RISE_PROBABILITY",
    "MOORE_OFFSETS",
    "VON_NEUMANN_OFFSETS",
    "RuleParameters",
    "StepRule",
    "count_automaton_neighbors",
    "rule_for",
    "step_automaton",
    "step_destroyer",
    "step_element",
    "step_fire",
    "step_gas",
    "step_generator",
    "step_immovable_solid",
    "step_liquid",
    "step_movable_solid",
    "step_nothing",
]
