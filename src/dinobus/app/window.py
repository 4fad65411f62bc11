"""
Game window using pygame.

Owns the display, turns keyboard and mouse input into session calls and
drives the frame loop: simulate the ticks the clock releases, render the
snapshot into a numpy buffer, blit it, yield to asyncio.
"""

import asyncio
import logging
from typing import Optional

import pygame

from dinobus.audio.engine import AudioEngine
from dinobus.core.state import State
from dinobus.exceptions import RenderSurfaceError
from dinobus.game.clock import SimulationClock
from dinobus.graphics.renderer import Renderer
from dinobus.session.controller import SessionController
from dinobus.settings import Settings

logger = logging.getLogger(__name__)

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)


class GameWindow:
    """
    Desktop window for DinoBus.

    Keyboard Mapping:
        SPACE / UP: Jump (start or try again outside a run)
        ENTER: Start or try again
        BACKSPACE: Park the bus (end the run)
        M: Toggle mute
        ESC: Quit
    Left mouse button behaves like SPACE.
    """

    def __init__(
        self,
        settings: Settings,
        controller: SessionController,
        audio: Optional[AudioEngine] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.settings = settings
        self.controller = controller
        self.audio = audio
        self.renderer = renderer or Renderer()
        self.sim_clock = SimulationClock(
            tick_rate=settings.tick_rate,
            fixed_timestep=settings.fixed_timestep,
        )

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._buffer = Renderer.new_buffer(settings.display.width, settings.display.height)
        self._running = False
        self._frame_count = 0

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        display = self.settings.display

        # Mixer has to be configured before pygame.init() opens it with defaults
        if self.audio:
            self.audio.init()

        pygame.init()
        pygame.display.set_caption(display.title)

        flags = pygame.DOUBLEBUF
        if display.resizable:
            flags |= pygame.RESIZABLE

        try:
            self._screen = pygame.display.set_mode((display.width, display.height), flags)
        except pygame.error as e:
            pygame.quit()
            raise RenderSurfaceError(f"Cannot open a {display.width}x{display.height} window: {e}") from e

        self._clock = pygame.time.Clock()
        self._resize(display.width, display.height)

        logger.info(f"Pygame initialized: {display.width}x{display.height}")

    def _resize(self, width: int, height: int) -> None:
        self._buffer = Renderer.new_buffer(width, height)
        self.controller.world.resize(width, height)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                if event.key in JUMP_KEYS:
                    self.controller.release_jump()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.controller.state is State.PLAYING:
                    self.controller.request_jump()
                else:
                    self.controller.play()

            elif event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        playing = self.controller.state is State.PLAYING

        if key == pygame.K_ESCAPE:
            self._running = False
        elif key in JUMP_KEYS:
            if playing:
                self.controller.press_jump()
            else:
                self.controller.play()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if not playing:
                self.controller.play()
        elif key == pygame.K_BACKSPACE:
            if playing:
                self.controller.end_game()
        elif key == pygame.K_m:
            if self.audio:
                self.audio.toggle_mute()

    def _render(self) -> None:
        """Draw the current frame and flip the display."""
        if not self._screen:
            return

        snapshot = self.controller.world.snapshot()
        self.renderer.render(self._buffer, snapshot, self.controller.view())

        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        try:
            while self._running:
                self._handle_events()

                delta = self._clock.get_time() / 1000.0
                for _ in range(self.sim_clock.advance(delta)):
                    self.controller.tick()

                self._render()
                self._clock.tick(self.settings.display.fps)
                self._frame_count += 1

                # Let the fact request make progress
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.controller.shutdown()
        if self.audio:
            self.audio.cleanup()
        pygame.quit()
        logger.info(f"Game window stopped after {self._frame_count} frames")
