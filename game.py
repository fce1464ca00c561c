"""
Game loop for the snake game: a fixed-timestep tick accumulator driving the
grid simulation, plus the per-frame animations.

Game owns the snake, the food and the state machine and is the only place
they meet. It never touches pygame directly; main.py feeds it timestamps
and input and hands the returned snapshots to the renderer.
"""

import logging
import math
import random
from typing import NamedTuple, Optional, Tuple

from constants import (
    BASE_TICK_MS,
    GRID_SIZE,
    INITIAL_LENGTH,
    MAX_FRAME_DELTA_MS,
    MIN_TICK_MS,
    PULSE_PERIOD_MS,
    SHAKE_AMPLITUDE_PX,
    SHAKE_DURATION_MS,
    SPEED_INCREMENT_MS,
)
from audio import AudioManager
from food import Food
from geometry import Coord, Direction
from snake import Snake
from state import Event, GameState, Screen
from storage import Storage
from utils import clamp, tick_interval_for_level

logger = logging.getLogger(__name__)


class SessionView(NamedTuple):
    """Read-only view of a running (or just finished) game."""
    body: Tuple[Coord, ...]
    head: Coord
    direction: Direction
    food: Optional[Coord]

    @property
    def food_active(self):
        return self.food is not None


class FrameSnapshot(NamedTuple):
    """Everything the renderer needs for one frame."""
    screen: Screen
    session: Optional[SessionView]  # None until the first game starts
    score: int
    high_score: int
    level: int
    is_new_record: bool
    muted: bool
    food_pulse: float
    shake_offset: Tuple[float, float]


class Game:
    """Class to manage the game state, updating logic, and animations."""
    def __init__(self, grid_size=GRID_SIZE, storage=None, audio=None, rng=None):
        if grid_size // 2 < INITIAL_LENGTH - 1:
            raise ValueError(f"Grid size {grid_size} is too small for the starting snake")
        self.grid_size = grid_size
        self.storage = storage if storage is not None else Storage()
        self.audio = audio if audio is not None else AudioManager()
        self.rng = rng if rng is not None else random.Random()

        self.state = GameState(self.storage.load_high_score())
        self.audio.muted = self.storage.load_mute()

        # Created fresh by every start_new_game()
        self.snake = None
        self.food = None

        self.last_timestamp = None
        self.tick_accum = 0.0

        self.shake_time_left = 0.0
        self.shake_offset = (0.0, 0.0)
        self.pulse_t = 0.0

        # Set only when hiding the window paused the game for us
        self.auto_paused = False
        self.mute_listeners = []

    # ------------------------------------------------------------------
    # Screen transitions

    def start_new_game(self):
        """Reset snake, food and animations, then enter PLAYING."""
        if not self.state.can(Event.START):
            return False
        self.snake = Snake(self.grid_size)
        self.food = Food(self.grid_size, rng=self.rng)
        self.food.spawn(self.snake.body)

        self.tick_accum = 0.0
        self.shake_time_left = 0.0
        self.shake_offset = (0.0, 0.0)
        self.pulse_t = 0.0
        self.auto_paused = False

        return self.state.start_game()

    def pause(self):
        if self.state.pause():
            # Partial-tick time is dropped so resuming never bursts
            self.tick_accum = 0.0
            return True
        return False

    def resume(self):
        return self.state.resume()

    def set_hidden(self, hidden):
        """Window hidden/shown. Only a pause we induced is undone on return."""
        if hidden:
            if self.state.screen is Screen.PLAYING:
                self.pause()
                self.auto_paused = True
        elif self.auto_paused:
            self.auto_paused = False
            self.resume()

    # ------------------------------------------------------------------
    # Input actions

    def on_any_input(self):
        self.audio.unlock()

    def on_direction(self, direction):
        if self.state.screen is Screen.PLAYING and self.snake is not None:
            self.snake.enqueue_direction(direction)

    def on_pause(self):
        """Pause key: toggles pause, or leaves a finished game for the menu."""
        screen = self.state.screen
        if screen is Screen.PLAYING:
            self.auto_paused = False
            self.pause()
        elif screen is Screen.PAUSED:
            self.auto_paused = False
            self.resume()
        elif screen in (Screen.GAME_OVER, Screen.WIN):
            self.state.return_to_menu()

    def on_confirm(self):
        screen = self.state.screen
        if screen in (Screen.MENU, Screen.GAME_OVER, Screen.WIN):
            self.start_new_game()
        elif screen is Screen.PAUSED:
            self.auto_paused = False
            self.resume()

    def toggle_mute(self):
        muted = self.audio.toggle_mute()
        self.storage.save_mute(muted)
        for listener in self.mute_listeners:
            listener(muted)
        return muted

    # ------------------------------------------------------------------
    # Loop

    def tick_interval(self):
        return tick_interval_for_level(self.state.level, BASE_TICK_MS, SPEED_INCREMENT_MS, MIN_TICK_MS)

    def frame(self, timestamp):
        """Advance by one rendered frame at `timestamp` (ms) and return a snapshot."""
        if self.last_timestamp is None:
            self.last_timestamp = timestamp
        delta = clamp(timestamp - self.last_timestamp, 0, MAX_FRAME_DELTA_MS)
        self.last_timestamp = timestamp
        self.update(delta)
        return self.snapshot()

    def update(self, delta_ms):
        """Consume whole ticks from the accumulator, then animate."""
        if self.state.screen is Screen.PLAYING:
            self.tick_accum += delta_ms
            interval = self.tick_interval()
            while self.tick_accum >= interval:
                self.tick_accum -= interval
                self.tick()
                # Death or a win ends the frame's remaining ticks
                if self.state.screen is not Screen.PLAYING:
                    self.tick_accum = 0.0
                    break
        self._update_shake(delta_ms)
        self._update_pulse(delta_ms)

    def tick(self):
        """One simulation step: move, then check death, then food."""
        if self.snake is None or self.food is None:
            return
        head = self.snake.move()

        if self.snake.is_dead():
            logger.debug("snake died (%s) at %s with score %d",
                         self.snake.death_cause(), head, self.state.score)
            self.audio.play("die")
            self.shake_time_left = SHAKE_DURATION_MS
            self.state.end_game()
            self.storage.save_high_score(self.state.high_score)
            return

        if self.food.is_eaten_by(head):
            self.snake.grow()
            leveled_up, _ = self.state.add_score()
            self.audio.play("levelup" if leveled_up else "eat")
            # Respawn food; no free cell left means the board is full
            self.food.spawn(self.snake.body)
            if not self.food.is_active:
                self.state.win()
                self.storage.save_high_score(self.state.high_score)

    def _update_shake(self, delta_ms):
        if self.shake_time_left > 0:
            self.shake_time_left = max(0.0, self.shake_time_left - delta_ms)
            amplitude = SHAKE_AMPLITUDE_PX * self.shake_time_left / SHAKE_DURATION_MS
            self.shake_offset = (
                (self.rng.random() * 2 - 1) * amplitude,
                (self.rng.random() * 2 - 1) * amplitude,
            )
        else:
            self.shake_offset = (0.0, 0.0)

    def _update_pulse(self, delta_ms):
        self.pulse_t = (self.pulse_t + delta_ms / PULSE_PERIOD_MS) % 1.0

    def food_pulse(self):
        """Pulse phase mapped onto a 0..1 sine."""
        return (math.sin(self.pulse_t * math.pi * 2) + 1) / 2

    def snapshot(self):
        session = None
        if self.snake is not None and self.food is not None:
            session = SessionView(
                body=self.snake.body,
                head=self.snake.head,
                direction=self.snake.direction,
                food=self.food.position,
            )
        return FrameSnapshot(
            screen=self.state.screen,
            session=session,
            score=self.state.score,
            high_score=self.state.high_score,
            level=self.state.level,
            is_new_record=self.state.is_new_record,
            muted=self.audio.muted,
            food_pulse=self.food_pulse(),
            shake_offset=self.shake_offset,
        )
