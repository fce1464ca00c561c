"""
Screen state machine, score, level and high score tracking.
"""

import logging
from enum import Enum

from constants import MAX_LEVEL, POINTS_PER_FOOD, POINTS_PER_LEVEL

logger = logging.getLogger(__name__)


class Screen(Enum):
    MENU = "MENU"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"
    WIN = "WIN"


class Event(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    DIE = "die"
    WIN = "win"
    RETURN = "return"


# (from screen, event) -> to screen. Anything missing is a no-op.
TRANSITIONS = {
    (Screen.MENU, Event.START): Screen.PLAYING,
    (Screen.GAME_OVER, Event.START): Screen.PLAYING,
    (Screen.WIN, Event.START): Screen.PLAYING,
    (Screen.PLAYING, Event.PAUSE): Screen.PAUSED,
    (Screen.PAUSED, Event.RESUME): Screen.PLAYING,
    (Screen.PLAYING, Event.DIE): Screen.GAME_OVER,
    (Screen.PLAYING, Event.WIN): Screen.WIN,
    (Screen.GAME_OVER, Event.RETURN): Screen.MENU,
    (Screen.WIN, Event.RETURN): Screen.MENU,
}


class GameState:
    """
    Current screen plus the numbers shown on the HUD.

    Score and level reset only when a new game starts; the high score only
    ever goes up and is the one value that survives between games.
    """
    def __init__(self, high_score=0, points_per_food=POINTS_PER_FOOD,
                 points_per_level=POINTS_PER_LEVEL, max_level=MAX_LEVEL):
        self.points_per_food = points_per_food
        self.points_per_level = points_per_level
        self.max_level = max_level
        self.screen = Screen.MENU
        self.score = 0
        self.level = 1
        self.high_score = max(0, high_score)
        self.is_new_record = False

    def can(self, event):
        return (self.screen, event) in TRANSITIONS

    def dispatch(self, event):
        """Apply `event` to the current screen. Returns True if it moved."""
        target = TRANSITIONS.get((self.screen, event))
        if target is None:
            return False
        if event is Event.START:
            self.score = 0
            self.level = 1
            self.is_new_record = False
        elif event in (Event.DIE, Event.WIN):
            self._update_high_score()
        logger.debug("screen %s -> %s (%s)", self.screen.name, target.name, event.value)
        self.screen = target
        return True

    def start_game(self):
        return self.dispatch(Event.START)

    def pause(self):
        return self.dispatch(Event.PAUSE)

    def resume(self):
        return self.dispatch(Event.RESUME)

    def end_game(self):
        return self.dispatch(Event.DIE)

    def win(self):
        return self.dispatch(Event.WIN)

    def return_to_menu(self):
        return self.dispatch(Event.RETURN)

    def add_score(self):
        """
        Credit one food. Returns (leveled_up, level) where leveled_up is True
        only on the call that crossed into a new level.
        """
        old_level = self.level
        self.score += self.points_per_food
        self.level = min(self.score // self.points_per_level + 1, self.max_level)
        leveled_up = self.level > old_level
        if leveled_up:
            logger.debug("level up: %d -> %d", old_level, self.level)
        return leveled_up, self.level

    def _update_high_score(self):
        if self.score > self.high_score:
            self.high_score = self.score
            self.is_new_record = True
