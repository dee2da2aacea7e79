"""Element catalog for the falling sand simulation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict
from typing import Optional
from typing import Tuple

from dataclasses_json import dataclass_json


Color = Tuple[int, int, int]


class BehaviorCategory(IntEnum):
    """Integer encoded behavior classes selecting how a cell is stepped."""

    BACKGROUND = 0
    IMMOVABLE_SOLID = 1
    MOVABLE_SOLID = 2
    LIQUID = 3
    GAS = 4
    GENERATOR = 5
    DESTROYER = 6
    AUTOMATON = 7
    FIRE = 8


@dataclass_json
@dataclass(frozen=True, eq=False)
class Element:
    """Immutable material definition.

    Elements compare by identity: two elements are equal only when they are
    the same catalog entry.
    """

    name: str
    category: BehaviorCategory
    display_color: Optional[Color] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Element requires a non-empty name")
        if not isinstance(self.category, BehaviorCategory):
            raise TypeError("category must be a BehaviorCategory member")

    @property
    def is_background(self) -> bool:
        return self.category is BehaviorCategory.BACKGROUND

    def __repr__(self) -> str:
        return f"Element({self.name})"


NOTHING = Element("Air", BehaviorCategory.BACKGROUND)
SAND = Element("Sand", BehaviorCategory.MOVABLE_SOLID, (253, 203, 0))
STONE = Element("Stone", BehaviorCategory.IMMOVABLE_SOLID, (80, 80, 80))
WATER = Element("Water", BehaviorCategory.LIQUID, (0, 121, 241))
STEAM = Element("Steam", BehaviorCategory.GAS, (200, 200, 210))
FAUCET = Element("Faucet", BehaviorCategory.GENERATOR, (130, 130, 170))
DRAIN = Element("Drain", BehaviorCategory.DESTROYER, (40, 30, 30))
MAZE = Element("Maze", BehaviorCategory.AUTOMATON, (0, 228, 48))
FIRE = Element("Fire", BehaviorCategory.FIRE, (255, 110, 0))

ELEMENTS: Tuple[Element, ...] = (
    NOTHING,
    SAND,
    STONE,
    WATER,
    STEAM,
    FAUCET,
    DRAIN,
    MAZE,
    FIRE,
)

_ELEMENTS_BY_NAME: Dict[str, Element] = {
    element.name.lower(): element for element in ELEMENTS
}


def element_by_name(name: str) -> Element:
    """Return the catalog element with the given (case-insensitive) name."""

    if not isinstance(name, str):
        raise TypeError("Element names must be strings")
    try:
        return _ELEMENTS_BY_NAME[name.strip().lower()]
    except KeyError as exc:
        known = ", ".join(element.name for element in ELEMENTS)
        raise ValueError(f"Unknown element: {name!r} (expected one of {known})") from exc


__all__ = [
    "BehaviorCategory",
    "Color",
    "Element",
    "ELEMENTS",
    "NOTHING",
    "SAND",
    "STONE",
    "WATER",
    "STEAM",
    "FAUCET",
    "DRAIN",
    "MAZE",
    "FIRE",
    "element_by_name",
]
