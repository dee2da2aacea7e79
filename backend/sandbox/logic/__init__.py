"""Core logic for the falling sand simulation: elements, grid and rules."""

from __future__ import annotations

from .elements import BehaviorCategory
from .elements import DRAIN
from .elements import ELEMENTS
from .elements import Element
from .elements import FAUCET
from .elements import FIRE
from .elements import MAZE
from .elements import NOTHING
from .elements import SAND
from .elements import STEAM
from .elements import STONE
from .elements import WATER
from .elements import element_by_name
from .grid import Coordinate
from .grid import Grid
from .grid import _default_logger
from .rules import RuleParameters
from .rules import rule_for
from .rules import step_element


__all__ = [
    "BehaviorCategory",
    "Coordinate",
    "DRAIN",
    "ELEMENTS",
    "Element",
    "FAUCET",
    "FIRE",
    "Grid",
    "MAZE",
    "NOTHING",
    "RuleParameters",
    "SAND",
    "STEAM",
    "STONE",
    "WATER",
    "element_by_name",
    "rule_for",
    "step_element",
]
