"""Frame renderer for DinoBus.

Draws a world snapshot plus the session HUD into a numpy RGB buffer.
Nothing here touches pygame, so frames can be rendered headless.
"""

import logging
import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from dinobus.core.state import State
from dinobus.game.world import WorldSnapshot
from dinobus.graphics.primitives import (
    GLYPH_HEIGHT,
    Color,
    draw_centered_text,
    draw_circle,
    draw_line,
    draw_rect,
    draw_sprite,
    draw_text,
    fill,
    wrap_text,
)
from dinobus.graphics.sprites import BUS, DINO, GEM, OBSTACLE_SPRITES
from dinobus.session.controller import SessionView

logger = logging.getLogger(__name__)

SKY: Color = (135, 206, 235)
GRASS: Color = (76, 175, 80)
SOIL: Color = (141, 110, 99)
CLOUD: Color = (255, 255, 255)
RAGE: Color = (255, 165, 0)
WHITE: Color = (255, 255, 255)
INK: Color = (40, 40, 40)
YELLOW: Color = (250, 204, 21)
RED: Color = (239, 68, 68)
BLUE: Color = (37, 99, 235)
GREEN: Color = (34, 197, 94)
GREY: Color = (107, 114, 128)

GRASS_DEPTH = 20

# (x, y, radius, parallax factor)
CLOUD_PUFFS = [
    (100, 80, 30, 1.0), (140, 80, 40, 1.0), (180, 80, 30, 1.0),
    (500, 120, 25, 0.8), (540, 110, 35, 0.8),
]


class Renderer:
    """Draws whole frames. Never mutates the snapshot or the view."""

    def __init__(self) -> None:
        self._frame = 0

    @staticmethod
    def new_buffer(width: int, height: int) -> NDArray[np.uint8]:
        return np.zeros((int(height), int(width), 3), dtype=np.uint8)

    def text_scale(self, buffer: NDArray[np.uint8]) -> int:
        return max(2, buffer.shape[0] // 180)

    def render(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot, view: SessionView) -> None:
        """Draw one complete frame into ``buffer``."""
        self._frame += 1

        self._draw_background(buffer, snapshot)
        self._draw_obstacles(buffer, snapshot)
        self._draw_collectibles(buffer, snapshot)
        self._draw_player(buffer, snapshot)
        self._draw_particles(buffer, snapshot)
        self._draw_hud(buffer, view)

        if view.state is State.START:
            self._draw_start_screen(buffer, view)
        elif view.state is State.GAME_OVER:
            self._draw_game_over(buffer, view)

    # ------------------------------------------------------------------
    # Scene
    # ------------------------------------------------------------------

    def _draw_background(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot) -> None:
        h, w = buffer.shape[:2]
        fill(buffer, SKY)

        ground = int(snapshot.ground_line)
        draw_rect(buffer, 0, ground, w, GRASS_DEPTH, GRASS)
        draw_rect(buffer, 0, ground + GRASS_DEPTH, w, h - ground - GRASS_DEPTH, SOIL)

        # Clouds drift at half a pixel per tick and wrap around the screen
        offset = (snapshot.tick * 0.5) % max(1, w)
        for x, y, radius, factor in CLOUD_PUFFS:
            drift = offset * factor
            cx = x - drift + (w if drift > x else 0)
            draw_circle(buffer, int(cx), y, radius, CLOUD, alpha=0.6)

    def _draw_player(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot) -> None:
        p = snapshot.player
        x, y, w, h = int(p.x), int(p.y), int(p.width), int(p.height)

        if not p.transformed:
            draw_sprite(buffer, BUS.pixels, BUS.mask, x, y, w, h)
            return

        alpha = 1.0
        if p.transform_timer < snapshot.transform_warning and (p.transform_timer // 10) % 2 == 0:
            alpha = 0.5
        draw_sprite(buffer, DINO.pixels, DINO.mask, x, y, w, h, mirror=True, alpha=alpha)

        ring = p.width / 1.2 + math.sin(snapshot.tick * 0.2) * 5
        draw_circle(buffer, x + w // 2, y + h // 2, int(ring), RAGE, filled=False, thickness=2)

        draw_line(buffer, x - 20, y + 10, x - 50, y + 10, WHITE)
        draw_line(buffer, x - 20, y + 40, x - 50, y + 40, WHITE)

    def _draw_obstacles(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot) -> None:
        for obstacle in snapshot.obstacles:
            sprite = OBSTACLE_SPRITES[obstacle.kind]
            draw_sprite(
                buffer, sprite.pixels, sprite.mask,
                int(obstacle.x), int(obstacle.y), int(obstacle.width), int(obstacle.height),
            )

    def _draw_collectibles(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot) -> None:
        bob = int(math.sin(snapshot.tick * 0.1) * 5)
        for gem in snapshot.collectibles:
            draw_sprite(
                buffer, GEM.pixels, GEM.mask,
                int(gem.x), int(gem.y) + bob, int(gem.width), int(gem.height),
            )

    def _draw_particles(self, buffer: NDArray[np.uint8], snapshot: WorldSnapshot) -> None:
        for particle in snapshot.particles:
            draw_rect(
                buffer,
                int(particle.x), int(particle.y), int(particle.width), int(particle.height),
                particle.color,
                alpha=max(0.0, min(1.0, particle.life)),
            )

    # ------------------------------------------------------------------
    # HUD and overlays
    # ------------------------------------------------------------------

    def _draw_hud(self, buffer: NDArray[np.uint8], view: SessionView) -> None:
        h, w = buffer.shape[:2]
        scale = self.text_scale(buffer)
        pad = 3 * scale

        label = f"* {view.score}"
        box_w = (len(label) * 4 + 4) * scale
        box_h = GLYPH_HEIGHT * scale + 2 * pad
        draw_rect(buffer, 16, 16, box_w, box_h, WHITE, alpha=0.8)
        draw_rect(buffer, 16, 16, box_w, box_h, YELLOW, filled=False, thickness=max(2, scale // 2))
        draw_text(buffer, label, 16 + pad, 16 + pad, INK, scale=scale)

        if view.transformed and view.state is State.PLAYING:
            banner = "ROAR! SMASH!"
            bounce = int(abs(math.sin(self._frame * 0.15)) * 6)
            bw = (len(banner) * 4 + 4) * scale
            bx = w - bw - 16
            draw_rect(buffer, bx, 16 - bounce, bw, box_h, RED)
            draw_text(buffer, banner, bx + pad, 16 + pad - bounce, WHITE, scale=scale)

        if view.state is State.PLAYING:
            draw_centered_text(
                buffer, "TAP OR PRESS SPACE TO JUMP", h - 3 * GLYPH_HEIGHT * scale,
                (230, 240, 240), scale=max(1, scale - 1),
            )

    def _panel(self, buffer: NDArray[np.uint8], height: int, accent: Color) -> Tuple[int, int, int, int]:
        h, w = buffer.shape[:2]
        pw = min(w - 32, 90 * self.text_scale(buffer))
        ph = min(h - 32, height)
        px = (w - pw) // 2
        py = (h - ph) // 2
        draw_rect(buffer, px, py, pw, ph, WHITE, alpha=0.9)
        draw_rect(buffer, px, py + ph - 8, pw, 8, accent)
        return px, py, pw, ph

    def _draw_start_screen(self, buffer: NDArray[np.uint8], view: SessionView) -> None:
        scale = self.text_scale(buffer)
        line = GLYPH_HEIGHT * scale
        px, py, pw, ph = self._panel(buffer, line * 18, BLUE)
        cx = px + pw // 2

        y = py + 2 * line
        draw_centered_text(buffer, "DINOBUS", y, BLUE, scale=scale * 2, cx=cx)
        y += 3 * line
        draw_centered_text(buffer, "RUNNER", y, YELLOW, scale=scale * 2, cx=cx, shadow=(202, 138, 4))
        y += 3 * line

        icon = line * 2
        draw_sprite(buffer, BUS.pixels, BUS.mask, cx - icon * 2, y - icon // 2, icon, icon)
        draw_sprite(buffer, DINO.pixels, DINO.mask, cx + icon, y - icon // 2, icon, icon, mirror=True)
        y += 2 * line

        draw_centered_text(buffer, "TAP TO JUMP!", y, GREY, scale=scale, cx=cx)
        y += 2 * line
        draw_centered_text(buffer, "COLLECT GEMS TO BECOME A DINO!", y, GREY, scale=max(1, scale - 1), cx=cx)
        y += 2 * line
        pulse = GREEN if (self._frame // 30) % 2 == 0 else (21, 128, 61)
        draw_centered_text(buffer, "PRESS SPACE TO PLAY!", y, pulse, scale=scale, cx=cx)
        if view.high_score:
            y += 2 * line
            draw_centered_text(buffer, f"BEST: {view.high_score}", y, GREY, scale=max(1, scale - 1), cx=cx)

    def _draw_game_over(self, buffer: NDArray[np.uint8], view: SessionView) -> None:
        scale = self.text_scale(buffer)
        small = max(1, scale - 1)
        line = GLYPH_HEIGHT * scale
        px, py, pw, ph = self._panel(buffer, line * 22, RED)
        cx = px + pw // 2

        y = py + 2 * line
        draw_centered_text(buffer, "BUS PARKED!", y, RED, scale=scale * 2, cx=cx)
        y += 3 * line
        draw_centered_text(buffer, "SCORE", y, GREY, scale=scale, cx=cx)
        y += 2 * line
        draw_centered_text(buffer, str(view.score), y, INK, scale=scale * 2, cx=cx)
        y += 2 * line
        best = "NEW BEST!" if view.new_high_score else f"BEST: {view.high_score}"
        draw_centered_text(buffer, best, y, GREY, scale=small, cx=cx)
        y += 2 * line

        draw_centered_text(buffer, "DINO FACT", y, BLUE, scale=scale, cx=cx)
        y += 2 * line
        if view.fact_loading:
            for i in range(3):
                hop = int(abs(math.sin(self._frame * 0.2 + i)) * scale * 2)
                draw_circle(buffer, cx + (i - 1) * 4 * scale, y - hop, scale + 1, (96, 165, 250))
            y += 2 * line
        else:
            for text in wrap_text(f"'{view.fact}'", pw - 8 * scale, small)[:5]:
                draw_centered_text(buffer, text, y, INK, scale=small, cx=cx)
                y += GLYPH_HEIGHT * small * 2
            y += line

        draw_centered_text(buffer, "PRESS SPACE TO TRY AGAIN", y, (161, 98, 7), scale=small, cx=cx)
