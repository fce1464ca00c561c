"""
Entry point: opens the pygame window and drives the game loop.

Usage:
    python main.py [--grid-size 20] [--save-file snake_save.pkl] [--mute]
"""

import argparse
import logging

import pygame

from audio import AudioManager
from constants import CELL_SIZE, FRAME_RATE, GRID_SIZE, SAVE_FILE
from controls import InputHandler
from game import Game
from renderer import Renderer
from storage import MemoryStorage, Storage

logger = logging.getLogger(__name__)

WINDOW_MARGIN = 16

# =============================================================================
#                               WINDOW HELPERS
# =============================================================================


def fit_board(width, height, grid_size, margin=WINDOW_MARGIN):
    """Largest square board that fits the window, as a multiple of grid_size."""
    available = min(width, height) - margin * 2
    return max(grid_size, (available // grid_size) * grid_size)


def window_caption(muted):
    return "Snake (muted)" if muted else "Snake"


# =============================================================================
#                                  APP
# =============================================================================


class SnakeApp:
    """Owns the window, the clock and the wiring between input, game and renderer."""
    def __init__(self, grid_size=GRID_SIZE, cell_size=CELL_SIZE, fps=FRAME_RATE,
                 storage=None, audio=None):
        pygame.init()
        self.fps = fps
        board = grid_size * cell_size + WINDOW_MARGIN * 2
        self.screen = pygame.display.set_mode((board, board), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()

        self.game = Game(grid_size, storage=storage, audio=audio)
        self.renderer = Renderer(grid_size, cell_size)
        self.controls = InputHandler(self.screen.get_size())
        self.running = False
        self._wire()
        pygame.display.set_caption(window_caption(self.game.audio.muted))

    def _wire(self):
        game = self.game
        self.controls.on_any_input = game.on_any_input
        self.controls.on_direction = game.on_direction
        self.controls.on_pause = game.on_pause
        self.controls.on_confirm = game.on_confirm
        self.controls.on_mute = game.toggle_mute
        self.controls.on_visibility = game.set_hidden
        self.controls.on_resize = self.resize
        self.controls.on_quit = self.stop
        game.mute_listeners.append(
            lambda muted: pygame.display.set_caption(window_caption(muted))
        )

    def resize(self, width, height):
        self.renderer.resize(fit_board(width, height, self.game.grid_size))

    def stop(self):
        self.running = False

    def run(self):
        """Main loop: one game frame per rendered frame."""
        self.running = True
        while self.running:
            self.clock.tick(self.fps)
            for event in pygame.event.get():
                self.controls.handle_event(event)
            snapshot = self.game.frame(pygame.time.get_ticks())
            self.renderer.render(self.screen, snapshot)
            pygame.display.flip()
        pygame.quit()
        return self.game.state.high_score


# =============================================================================
#                                  MAIN
# =============================================================================


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Snake.")
    parser.add_argument('--grid-size', type=int, default=GRID_SIZE)
    parser.add_argument('--cell-size', type=int, default=CELL_SIZE)
    parser.add_argument('--fps', type=int, default=FRAME_RATE)
    parser.add_argument('--save-file', type=str, default=SAVE_FILE)
    parser.add_argument('--no-save', dest='save', action='store_false',
                        help="keep the high score in memory only")
    parser.add_argument('--sounds-dir', type=str, default=None,
                        help="directory with eat.wav / die.wav / levelup.wav")
    parser.add_argument('--mute', action='store_true', help="start muted")
    parser.add_argument('--log-level', type=str, default='WARNING')
    parser.set_defaults(save=True)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    storage = Storage(args.save_file) if args.save else MemoryStorage()
    if args.mute and not storage.load_mute():
        storage.save_mute(True)
    audio = AudioManager(sounds_dir=args.sounds_dir)

    app = SnakeApp(args.grid_size, args.cell_size, args.fps, storage=storage, audio=audio)
    high_score = app.run()
    print(f"High Score: {high_score}")


if __name__ == '__main__':
    main()
