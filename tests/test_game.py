import math
import random

import pytest

from geometry import Coord, Direction
from game import Game
from state import Screen
from storage import MemoryStorage


class FakeAudio:
    def __init__(self):
        self.played = []
        self.muted = False
        self.unlocks = 0

    def play(self, name):
        self.played.append(name)

    def unlock(self):
        self.unlocks += 1

    def toggle_mute(self):
        self.muted = not self.muted
        return self.muted


def make_game(grid_size=10, high_score=0, muted=False):
    storage = MemoryStorage()
    storage.save_high_score(high_score)
    storage.save_mute(muted)
    return Game(grid_size, storage=storage, audio=FakeAudio(), rng=random.Random(0))


def playing_game(**kwargs):
    game = make_game(**kwargs)
    game.start_new_game()
    # Park the food where the snake heading right will not reach it
    game.food.position = Coord(0, 0)
    return game


def test_starts_on_menu_without_session():
    game = make_game(high_score=70, muted=True)
    snapshot = game.snapshot()
    assert snapshot.screen is Screen.MENU
    assert snapshot.session is None
    assert snapshot.score == 0
    assert snapshot.high_score == 70
    assert snapshot.muted is True
    assert snapshot.food_pulse == pytest.approx(0.5)
    assert snapshot.shake_offset == (0.0, 0.0)


def test_grid_too_small_is_rejected():
    with pytest.raises(ValueError):
        Game(3, storage=MemoryStorage(), audio=FakeAudio())


def test_start_new_game():
    game = make_game()
    assert game.start_new_game()
    assert game.state.screen is Screen.PLAYING
    assert len(game.snake) == 3
    assert game.food.is_active
    assert not game.snake.occupies(game.food.position)
    session = game.snapshot().session
    assert session.body == (Coord(5, 5), Coord(4, 5), Coord(3, 5))
    assert session.food_active


def test_start_is_ignored_while_playing():
    game = playing_game()
    game.tick()
    assert not game.start_new_game()
    assert game.snake.head == Coord(6, 5)


def test_tick_moves_without_scoring():
    game = playing_game()
    game.tick()
    assert game.snake.head == Coord(6, 5)
    assert len(game.snake) == 3
    assert game.state.score == 0
    assert game.audio.played == []


def test_eating_food_ahead():
    game = playing_game()
    game.food.position = Coord(6, 5)
    game.tick()
    assert game.state.score == 10
    assert len(game.snake) == 3
    assert game.food.is_active
    assert not game.snake.occupies(game.food.position)
    assert game.audio.played == ["eat"]

    game.food.position = Coord(0, 0)
    game.tick()
    assert len(game.snake) == 4


def test_level_up_plays_distinct_cue():
    game = playing_game()
    game.state.score = 40
    game.food.position = Coord(6, 5)
    game.tick()
    assert game.state.level == 2
    assert game.audio.played == ["levelup"]
    assert game.tick_interval() == 180


def test_wall_death():
    game = playing_game()
    for _ in range(4):
        game.tick()
    assert game.state.screen is Screen.PLAYING
    game.tick()
    assert game.state.screen is Screen.GAME_OVER
    assert game.audio.played == ["die"]
    assert game.shake_time_left == 300
    # The finished snake stays visible
    assert game.snapshot().session.head == Coord(10, 5)


def test_death_saves_high_score_only_when_beaten():
    game = playing_game(high_score=15)
    game.state.score = 20
    for _ in range(5):
        game.tick()
    assert game.storage.load_high_score() == 20
    assert game.state.is_new_record

    game.start_new_game()
    game.food.position = Coord(0, 0)
    game.state.score = 10
    for _ in range(5):
        game.tick()
    assert game.state.screen is Screen.GAME_OVER
    assert game.storage.load_high_score() == 20
    assert game.state.high_score == 20
    assert not game.state.is_new_record


def test_filling_the_board_wins():
    game = make_game(grid_size=4)
    game.start_new_game()
    # Snake starts at (2, 2), (1, 2), (0, 2); the tour covers each remaining cell
    tour = [
        (Direction.RIGHT, Coord(3, 2)),
        (Direction.DOWN, Coord(3, 3)),
        (Direction.LEFT, Coord(2, 3)),
        (Direction.LEFT, Coord(1, 3)),
        (Direction.LEFT, Coord(0, 3)),
        (Direction.UP, Coord(0, 2)),
        (Direction.UP, Coord(0, 1)),
        (Direction.UP, Coord(0, 0)),
        (Direction.RIGHT, Coord(1, 0)),
        (Direction.RIGHT, Coord(2, 0)),
        (Direction.RIGHT, Coord(3, 0)),
        (Direction.DOWN, Coord(3, 1)),
        (Direction.LEFT, Coord(2, 1)),
        (Direction.LEFT, Coord(1, 1)),
    ]
    for direction, cell in tour:
        assert game.state.screen is Screen.PLAYING
        game.on_direction(direction)
        game.food.position = cell
        game.tick()
        assert game.snake.head == cell

    assert game.state.screen is Screen.WIN
    assert len(game.snake) == 16
    assert len(set(game.snake.body)) == 16
    assert not game.food.is_active
    assert game.snapshot().session.food is None
    assert game.state.score == 140
    assert game.storage.load_high_score() == 140
    assert game.audio.played.count("levelup") == 2
    assert game.audio.played[-1] == "eat"


def test_accumulator_consumes_whole_ticks():
    game = playing_game()
    game.update(199)
    assert game.snake.head == Coord(5, 5)
    game.update(1)
    assert game.snake.head == Coord(6, 5)
    game.update(450)
    assert game.snake.head == Coord(8, 5)
    assert game.tick_accum == pytest.approx(50)


def test_first_frame_has_no_delta_and_big_gaps_are_clamped():
    game = playing_game()
    game.frame(1000)
    assert game.snake.head == Coord(5, 5)
    game.frame(60000)
    assert game.snake.head == Coord(6, 5)
    assert game.tick_accum == 0


def test_death_discards_remaining_ticks():
    game = playing_game()
    for _ in range(3):
        game.tick()
    game.update(1000)
    assert game.state.screen is Screen.GAME_OVER
    assert game.snake.head == Coord(10, 5)
    assert game.tick_accum == 0


def test_direction_input_only_while_playing():
    game = make_game()
    game.on_direction(Direction.UP)
    game.start_new_game()
    game.food.position = Coord(0, 0)
    game.on_direction(Direction.UP)
    game.tick()
    assert game.snake.head == Coord(5, 4)

    game.on_pause()
    game.on_direction(Direction.LEFT)
    assert game.snake.queued_directions == ()


def test_paused_game_does_not_tick_or_burst_on_resume():
    game = playing_game()
    game.update(150)
    game.on_pause()
    assert game.state.screen is Screen.PAUSED
    game.update(1000)
    assert game.snake.head == Coord(5, 5)
    game.on_pause()
    assert game.state.screen is Screen.PLAYING
    game.update(60)
    assert game.snake.head == Coord(5, 5)
    game.update(140)
    assert game.snake.head == Coord(6, 5)


def test_pause_key_returns_to_menu_after_game_over():
    game = playing_game()
    for _ in range(5):
        game.tick()
    game.on_pause()
    assert game.state.screen is Screen.MENU


def test_confirm_starts_and_resumes():
    game = make_game()
    game.on_confirm()
    assert game.state.screen is Screen.PLAYING
    game.on_pause()
    game.on_confirm()
    assert game.state.screen is Screen.PLAYING


def test_hidden_window_auto_pauses_and_resumes():
    game = playing_game()
    game.set_hidden(True)
    assert game.state.screen is Screen.PAUSED
    assert game.auto_paused
    game.set_hidden(False)
    assert game.state.screen is Screen.PLAYING
    assert not game.auto_paused


def test_user_pause_survives_visibility_changes():
    game = playing_game()
    game.on_pause()
    game.set_hidden(True)
    game.set_hidden(False)
    assert game.state.screen is Screen.PAUSED


def test_visibility_on_menu_changes_nothing():
    game = make_game()
    game.set_hidden(True)
    game.set_hidden(False)
    assert game.state.screen is Screen.MENU


def test_user_resume_while_hidden_clears_auto_pause():
    game = playing_game()
    game.set_hidden(True)
    game.on_pause()
    game.on_pause()
    game.set_hidden(False)
    assert game.state.screen is Screen.PAUSED


def test_toggle_mute_persists_and_notifies():
    game = make_game()
    heard = []
    game.mute_listeners.append(heard.append)
    assert game.toggle_mute() is True
    assert game.storage.load_mute() is True
    assert heard == [True]
    assert game.toggle_mute() is False
    assert game.storage.load_mute() is False
    assert heard == [True, False]


def test_any_input_unlocks_audio():
    game = make_game()
    game.on_any_input()
    assert game.audio.unlocks == 1


def test_shake_decays_after_death():
    game = playing_game()
    for _ in range(5):
        game.tick()
    game.update(100)
    assert game.shake_time_left == pytest.approx(200)
    x, y = game.shake_offset
    assert abs(x) <= 4 and abs(y) <= 4
    game.update(250)
    assert game.shake_time_left == 0
    game.update(16)
    assert game.shake_offset == (0.0, 0.0)


def test_food_pulse_runs_on_every_screen():
    game = make_game()
    game.update(200)
    assert game.pulse_t == pytest.approx(0.25)
    assert game.food_pulse() == pytest.approx(1.0)
    game.update(400)
    assert game.food_pulse() == pytest.approx((math.sin(math.pi * 1.5) + 1) / 2)
