"""Dense row-major grid of elements and the per-tick update pass."""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from .elements import Element
from .elements import NOTHING
from .rules import RuleParameters
from .rules import step_element


Coordinate = Tuple[int, int]


def _default_logger(message: str) -> None:
    """No-op logger used when a caller does not provide a callback."""

    return None


class Grid:
    """Fixed-size 2D grid holding exactly one element per cell.

    Reads outside the grid return the background element and writes outside
    the grid are ignored, so stepping rules never special-case the edges.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        rng: Optional[random.Random] = None,
        parameters: Optional[RuleParameters] = None,
        log_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
            raise ValueError("width must be a positive integer")
        if isinstance(height, bool) or not isinstance(height, int) or height <= 0:
            raise ValueError("height must be a positive integer")
        if parameters is not None and not isinstance(parameters, RuleParameters):
            raise TypeError("parameters must be provided as a RuleParameters instance")

        self._width = width
        self._height = height
        self._cells: List[Element] = [NOTHING] * (width * height)
        self._rng = rng if rng is not None else random.Random()
        self._parameters = parameters or RuleParameters()
        self._log = log_callback or _default_logger
        self._settled: Set[Coordinate] = set()
        self._ticking = False

        self._log(f"Created {width}x{height} grid")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rng(self) -> random.Random:
        """Pseudorandom source shared by every rule invocation on this grid."""

        return self._rng

    @property
    def parameters(self) -> RuleParameters:
        return self._parameters

    def is_within_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def is_empty(self, x: int, y: int) -> bool:
        """Return True for in-bounds cells holding the background element."""

        return self.is_within_bounds(x, y) and self._cells[y * self._width + x].is_background

    def get(self, x: int, y: int) -> Element:
        if not self.is_within_bounds(x, y):
            return NOTHING
        return self._cells[y * self._width + x]

    def set(self, x: int, y: int, element: Element) -> None:
        if not self.is_within_bounds(x, y):
            return
        self._cells[y * self._width + x] = element

    def move(self, source: Coordinate, target: Coordinate) -> None:
        """Move the source cell onto ``target``, leaving background behind.

        The target must be background; moving onto an occupied cell
        overwrites its occupant.
        """

        element = self.get(*source)
        self.set(target[0], target[1], element)
        self.set(source[0], source[1], NOTHING)
        self._mark_settled(target)

    def swap(self, first: Coordinate, second: Coordinate) -> None:
        """Exchange the contents of two cells."""

        first_element = self.get(*first)
        second_element = self.get(*second)
        self.set(first[0], first[1], second_element)
        self.set(second[0], second[1], first_element)
        self._mark_settled(first)
        self._mark_settled(second)

    def update(self) -> None:
        """Advance the grid by one tick.

        Rows are visited bottom to top and columns left to right. Material
        moved or swapped into a cell during this pass is not stepped again
        until the next tick.
        """

        self._settled.clear()
        self._ticking = True
        try:
            for y in range(self._height - 1, -1, -1):
                for x in range(self._width):
                    if (x, y) in self._settled:
                        continue
                    step_element(self, x, y, self._parameters)
        finally:
            self._ticking = False
            self._settled.clear()

    def reset(self) -> None:
        """Clear every cell back to the background element."""

        self._cells = [NOTHING] * (self._width * self._height)
        self._settled.clear()
        self._log(f"Reset {self._width}x{self._height} grid to background")

    def traverse_line(
        self,
        start: Coordinate,
        end: Coordinate,
        visit: Callable[[int, int], None],
    ) -> None:
        """Call ``visit`` for every cell on the line from ``start`` to ``end``.

        Both endpoints are visited; out-of-bounds points are passed through
        unchanged so callers decide how to handle them.
        """

        for x, y in _line_points(start, end):
            visit(x, y)

    def rows(self) -> Iterator[Tuple[Element, ...]]:
        """Yield each row from top to bottom."""

        for y in range(self._height):
            offset = y * self._width
            yield tuple(self._cells[offset : offset + self._width])

    def population(self) -> Dict[Element, int]:
        """Count the non-background elements currently on the grid."""

        counts: Dict[Element, int] = {}
        for element in self._cells:
            if element.is_background:
                continue
            counts[element] = counts.get(element, 0) + 1
        return counts

    def _mark_settled(self, coordinate: Coordinate) -> None:
        if self._ticking:
            self._settled.add((coordinate[0], coordinate[1]))


def _line_points(start: Coordinate, end: Coordinate) -> Iterator[Coordinate]:
    start_x, start_y = start
    end_x, end_y = end
    dx = end_x - start_x
    dy = end_y - start_y
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        yield (start_x, start_y)
        return
    x_increment = dx / steps
    y_increment = dy / steps
    for index in range(steps + 1):
        yield (
            int(math.floor(start_x + x_increment * index + 0.5)),
            int(math.floor(start_y + y_increment * index + 0.5)),
        )


__all__ = ["Coordinate", "Grid"]
