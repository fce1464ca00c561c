"""
Turns raw pygame events into game actions.

Keyboard: arrows/WASD move, Escape/P pause, Enter confirms, M mutes.
Touch and mouse drags are read as swipes along their dominant axis.
"""

import pygame

from constants import MIN_SWIPE_PX
from geometry import Direction

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}
PAUSE_KEYS = (pygame.K_ESCAPE, pygame.K_p)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
MUTE_KEYS = (pygame.K_m,)

HIDDEN_EVENTS = (pygame.WINDOWHIDDEN, pygame.WINDOWMINIMIZED, pygame.WINDOWFOCUSLOST)
SHOWN_EVENTS = (pygame.WINDOWSHOWN, pygame.WINDOWRESTORED, pygame.WINDOWFOCUSGAINED)


def swipe_direction(dx, dy, threshold=MIN_SWIPE_PX):
    """Direction of a swipe, or None if it is too short to be one."""
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class InputHandler:
    """
    Dispatches events to whichever callbacks have been assigned. Any
    callback left as None is skipped.
    """
    def __init__(self, window_size=(0, 0)):
        self.window_size = window_size

        self.on_any_input = None   # () every key press or touch
        self.on_direction = None   # (Direction)
        self.on_pause = None       # ()
        self.on_confirm = None     # ()
        self.on_mute = None        # ()
        self.on_visibility = None  # (hidden: bool)
        self.on_resize = None      # (width, height)
        self.on_quit = None        # ()

        self._swipe_start = None

    @staticmethod
    def _fire(callback, *args):
        if callback is not None:
            callback(*args)

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self._fire(self.on_quit)
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        elif event.type == pygame.FINGERDOWN:
            self._fire(self.on_any_input)
            self._swipe_start = self._finger_pos(event)
        elif event.type == pygame.FINGERUP:
            self._end_swipe(self._finger_pos(event))
        # pygame mirrors touches as mouse events; those carry touch=True
        elif event.type == pygame.MOUSEBUTTONDOWN and not getattr(event, "touch", False):
            self._fire(self.on_any_input)
            self._swipe_start = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and not getattr(event, "touch", False):
            self._end_swipe(event.pos)
        elif event.type in HIDDEN_EVENTS:
            self._fire(self.on_visibility, True)
        elif event.type in SHOWN_EVENTS:
            self._fire(self.on_visibility, False)
        elif event.type == pygame.VIDEORESIZE:
            self.window_size = (event.w, event.h)
            self._fire(self.on_resize, event.w, event.h)

    def _handle_key(self, key):
        self._fire(self.on_any_input)
        direction = KEY_TO_DIRECTION.get(key)
        if direction is not None:
            self._fire(self.on_direction, direction)
        elif key in PAUSE_KEYS:
            self._fire(self.on_pause)
        elif key in CONFIRM_KEYS:
            self._fire(self.on_confirm)
        elif key in MUTE_KEYS:
            self._fire(self.on_mute)

    def _finger_pos(self, event):
        # Finger coordinates are normalised to 0..1 across the window
        width, height = self.window_size
        return event.x * width, event.y * height

    def _end_swipe(self, pos):
        if self._swipe_start is None:
            return
        start_x, start_y = self._swipe_start
        self._swipe_start = None
        direction = swipe_direction(pos[0] - start_x, pos[1] - start_y)
        if direction is not None:
            self._fire(self.on_direction, direction)
