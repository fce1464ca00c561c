"""
Grid coordinates and the four cardinal directions.
"""

from enum import Enum
from typing import NamedTuple


class Coord(NamedTuple):
    """A cell on the grid, 0-indexed from the top-left corner."""
    x: int
    y: int

    def step(self, direction):
        """Return the neighbouring cell one step in `direction`."""
        return Coord(self.x + direction.dx, self.y + direction.dy)


class Direction(Enum):
    """Closed set of movement directions, each carrying its (dx, dy) delta."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]

    @property
    def opposite(self):
        return _OPPOSITES[self]

    def is_opposite(self, other):
        return _OPPOSITES[self] is other


# Two disjoint pairs: {UP, DOWN} and {LEFT, RIGHT}
_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
