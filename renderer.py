"""
Draws a FrameSnapshot onto a pygame surface. Reads state, never changes it.
"""

import numpy as np
import pygame

from constants import CELL_SIZE, COLORS, GRID_SIZE
from state import Screen

LINE_HEIGHT = 28


class Renderer:
    def __init__(self, grid_size=GRID_SIZE, cell_size=CELL_SIZE):
        if not pygame.font.get_init():
            pygame.font.init()
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.size = grid_size * cell_size
        self.font_small = pygame.font.Font(None, 22)
        self.font_large = pygame.font.Font(None, 48)
        self.font_huge = pygame.font.Font(None, 72)
        self.canvas = pygame.Surface((self.size, self.size))

    def resize(self, available_size):
        """Fit the board into a square of `available_size` pixels."""
        self.cell_size = max(1, available_size // self.grid_size)
        self.size = self.grid_size * self.cell_size
        self.canvas = pygame.Surface((self.size, self.size))

    def render(self, surface, snapshot):
        """Draw one full frame, shifted by the snapshot's shake offset."""
        canvas = self.canvas
        canvas.fill(COLORS["background"])
        self.draw_grid(canvas)

        session = snapshot.session
        if session is not None:
            if session.food_active:
                self.draw_food(canvas, session.food, snapshot.food_pulse)
            self.draw_snake(canvas, session.body)
        self.draw_hud(canvas, snapshot.score, snapshot.high_score, snapshot.level)

        if snapshot.screen is Screen.MENU:
            self.draw_menu(canvas)
        elif snapshot.screen is Screen.PAUSED:
            self.draw_paused(canvas)
        elif snapshot.screen is Screen.GAME_OVER:
            self.draw_game_over(canvas, snapshot.score, snapshot.is_new_record)
        elif snapshot.screen is Screen.WIN:
            self.draw_win(canvas, snapshot.score)

        # Centre the board in the window, then apply the shake
        surface.fill(COLORS["background"])
        sx, sy = snapshot.shake_offset
        left = (surface.get_width() - self.size) // 2
        top = (surface.get_height() - self.size) // 2
        surface.blit(canvas, (left + round(sx), top + round(sy)))

    def cell_rect(self, cell, inset=0):
        x_px, y_px = np.multiply(cell, self.cell_size)
        return pygame.Rect(int(x_px) + inset, int(y_px) + inset,
                           self.cell_size - 2 * inset, self.cell_size - 2 * inset)

    def draw_grid(self, surface):
        for i in range(self.grid_size + 1):
            pos = i * self.cell_size
            pygame.draw.line(surface, COLORS["grid"], (pos, 0), (pos, self.size))
            pygame.draw.line(surface, COLORS["grid"], (0, pos), (self.size, pos))

    def draw_snake(self, surface, body):
        """Bright head, then body, fading to a darker tail."""
        length = len(body)
        for i, segment in enumerate(body):
            if i == 0:
                color = COLORS["snake_head"]
            elif i < length * 0.4:
                color = COLORS["snake_body"]
            else:
                color = COLORS["snake_tail"]
            pygame.draw.rect(surface, color, self.cell_rect(segment, inset=1))

    def draw_food(self, surface, position, pulse):
        """Food square that grows and glows with `pulse` (0..1)."""
        scale = 0.6 + 0.3 * pulse
        draw_size = max(1, int(self.cell_size * scale))
        rect = pygame.Rect(0, 0, draw_size, draw_size)
        rect.center = self.cell_rect(position).center
        glow = rect.inflate(int(4 + 4 * pulse), int(4 + 4 * pulse))
        pygame.draw.rect(surface, COLORS["food_glow"], glow, border_radius=3)
        pygame.draw.rect(surface, COLORS["food"], rect)

    def draw_hud(self, surface, score, high_score, level):
        pad = 10
        left = self.font_small.render(f"SCORE {score}", True, COLORS["hud_text"])
        mid = self.font_small.render(f"LV {level}", True, COLORS["hud_text"])
        right = self.font_small.render(f"HI {high_score}", True, COLORS["hud_text"])
        surface.blit(left, (pad, pad))
        surface.blit(mid, mid.get_rect(midtop=(self.size // 2, pad)))
        surface.blit(right, right.get_rect(topright=(self.size - pad, pad)))

    def draw_overlay(self, surface):
        overlay = pygame.Surface((self.size, self.size), pygame.SRCALPHA)
        overlay.fill(COLORS["overlay"])
        surface.blit(overlay, (0, 0))

    def centre_text(self, surface, text, y, font, color):
        label = font.render(text, True, color)
        surface.blit(label, label.get_rect(center=(self.size // 2, y)))

    def draw_menu(self, surface):
        self.draw_overlay(surface)
        mid = self.size // 2
        self.centre_text(surface, "SNAKE", mid - 80, self.font_huge, COLORS["title"])
        self.centre_text(surface, "PRESS ENTER TO PLAY", mid - 10, self.font_small, COLORS["subtitle"])
        self.centre_text(surface, "ARROWS / WASD  MOVE", mid - 10 + LINE_HEIGHT, self.font_small, COLORS["muted_text"])
        self.centre_text(surface, "P / ESC  PAUSE", mid - 10 + LINE_HEIGHT * 2, self.font_small, COLORS["muted_text"])
        self.centre_text(surface, "M  MUTE", mid - 10 + LINE_HEIGHT * 3, self.font_small, COLORS["muted_text"])

    def draw_paused(self, surface):
        self.draw_overlay(surface)
        mid = self.size // 2
        self.centre_text(surface, "PAUSED", mid - 20, self.font_large, COLORS["title"])
        self.centre_text(surface, "P / ESC  TO RESUME", mid + 24, self.font_small, COLORS["subtitle"])

    def draw_game_over(self, surface, score, is_new_record):
        self.draw_overlay(surface)
        mid = self.size // 2
        self.centre_text(surface, "GAME OVER", mid - 60, self.font_large, COLORS["game_over"])
        y = mid - 10
        if is_new_record:
            self.centre_text(surface, "NEW RECORD!", y, self.font_small, COLORS["highlight"])
            y += LINE_HEIGHT
        self.centre_text(surface, f"SCORE  {score}", y, self.font_small, COLORS["subtitle"])
        self.centre_text(surface, "ENTER  PLAY AGAIN", y + LINE_HEIGHT, self.font_small, COLORS["subtitle"])
        self.centre_text(surface, "ESC  MAIN MENU", y + LINE_HEIGHT * 2, self.font_small, COLORS["muted_text"])

    def draw_win(self, surface, score):
        self.draw_overlay(surface)
        mid = self.size // 2
        self.centre_text(surface, "YOU WIN!", mid - 50, self.font_large, COLORS["highlight"])
        self.centre_text(surface, f"SCORE  {score}", mid + 10, self.font_small, COLORS["subtitle"])
        self.centre_text(surface, "ENTER  PLAY AGAIN", mid + 10 + LINE_HEIGHT, self.font_small, COLORS["subtitle"])
        self.centre_text(surface, "ESC  MAIN MENU", mid + 10 + LINE_HEIGHT * 2, self.font_small, COLORS["muted_text"])
