"""
The player's snake: body, buffered direction changes, movement and collisions.
"""

from collections import deque

from constants import GRID_SIZE, INITIAL_LENGTH, MAX_DIRECTION_QUEUE
from geometry import Coord, Direction
from utils import coord_in_list


class Snake:
    """
    Class representing the snake.

    The body is stored head-first (body[0] is the head) and is only ever
    handed out as a tuple so callers cannot mutate it.
    """
    def __init__(self, grid_size=GRID_SIZE, length=INITIAL_LENGTH, queue_size=MAX_DIRECTION_QUEUE):
        mid = grid_size // 2
        if length < 1 or mid - (length - 1) < 0:
            raise ValueError(
                f"A snake of length {length} does not fit on a {grid_size}x{grid_size} grid"
            )
        self.grid_size = grid_size
        self.queue_size = queue_size
        # Start centred, facing right, with the rest of the body to the left.
        self._body = [Coord(mid - i, mid) for i in range(length)]
        self._direction = Direction.RIGHT
        self._queue = deque()
        self._grow_pending = False

    @property
    def body(self):
        return tuple(self._body)

    @property
    def head(self):
        return self._body[0]

    @property
    def direction(self):
        return self._direction

    @property
    def queued_directions(self):
        return tuple(self._queue)

    def __len__(self):
        return len(self._body)

    def effective_direction(self):
        """Direction in force once every queued turn has been applied."""
        return self._queue[-1] if self._queue else self._direction

    def enqueue_direction(self, new_direction):
        """
        Buffer a turn for a later tick. Reversals, repeats of the effective
        direction and turns beyond the queue capacity are silently dropped.
        Returns True if the turn was queued.
        """
        if not isinstance(new_direction, Direction):
            return False
        effective = self.effective_direction()
        if new_direction is effective or new_direction.is_opposite(effective):
            return False
        if len(self._queue) >= self.queue_size:
            return False
        self._queue.append(new_direction)
        return True

    def move(self):
        """Move the snake one cell and return the new head."""
        if self._queue:
            self._direction = self._queue.popleft()
        new_head = self.head.step(self._direction)
        self._body.insert(0, new_head)
        if self._grow_pending:
            self._grow_pending = False
        else:
            self._body.pop()  # Remove tail if not growing
        return new_head

    def grow(self):
        """Set flag to grow snake (by not removing tail on next move)."""
        self._grow_pending = True

    def is_out_of_bounds(self):
        x, y = self.head
        return not (0 <= x < self.grid_size and 0 <= y < self.grid_size)

    def is_self_colliding(self):
        return coord_in_list(self.head, self._body[1:])

    def is_dead(self):
        return self.is_out_of_bounds() or self.is_self_colliding()

    def death_cause(self):
        """Short label for why the snake died, or None while alive."""
        if self.is_out_of_bounds():
            return "wall"
        if self.is_self_colliding():
            return "self"
        return None

    def occupies(self, coord):
        return coord_in_list(coord, self._body)
