"""
Food placement on the free cells of the grid.
"""

import random

import numpy as np

from constants import GRID_SIZE
from geometry import Coord
from utils import coords_equal, random_int


class Food:
    """Class representing the food the snake eats."""
    def __init__(self, grid_size=GRID_SIZE, rng=random):
        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        self.grid_size = grid_size
        self.rng = rng
        self.position = None  # None while no free cell exists

    @property
    def is_active(self):
        return self.position is not None

    def free_cells(self, occupied_cells):
        """Return every unoccupied cell in row-major order."""
        free = np.ones((self.grid_size, self.grid_size), dtype=bool)
        for x, y in occupied_cells:
            if 0 <= x < self.grid_size and 0 <= y < self.grid_size:
                free[y, x] = False
        # argwhere walks the mask row by row, yielding (y, x) pairs
        return [Coord(int(x), int(y)) for y, x in np.argwhere(free)]

    def spawn(self, occupied_cells):
        """
        Place the food uniformly at random on a free cell.
        Leaves the food inactive when the board is full.
        """
        cells = self.free_cells(occupied_cells)
        if not cells:
            self.position = None
            return None
        self.position = cells[random_int(0, len(cells) - 1, self.rng)]
        return self.position

    def is_eaten_by(self, coord):
        if self.position is None:
            return False
        return coords_equal(self.position, coord)
