"""
Main application class.

Opens the window, wires engine, renderer and driver together, and
presents each finished frame.
"""

import asyncio
import logging
import os

import pygame

from ..config import Config
from ..input.keypad import forward_key_event
from ..vm.handle import VMHandle
from .driver import FrameDriver
from .renderer import GridRenderer
from .surface import PygameSurface

logger = logging.getLogger(__name__)


class Application:
    """
    Host application.

    All frames render to an offscreen surface of the configured size,
    which is blitted to the window after every frame.
    """

    def __init__(self, config: Config, vm: VMHandle):
        """
        Initialize the application.

        Args:
            config: Application configuration
            vm: Engine to drive (ownership passes to the driver)
        """
        self.config = config

        # Initialize Pygame
        pygame.init()
        pygame.display.set_caption("CHIP-8")

        self.window = self._open_window()

        # Offscreen surface the renderer owns
        self.surface = PygameSurface(config.surface_size)

        self.renderer = GridRenderer(
            config.render_config(),
            self.surface,
            glow_color=config.glow_color,
            background_color=config.background_color
        )

        self.driver = FrameDriver(
            vm,
            self.renderer,
            frame_interval=config.frame_interval,
            dump_frames=config.dump_frames
        )
        self.driver.add_frame_hook(self._after_frame)

        rc = self.renderer.config
        logger.info(
            f"Surface {rc.surface_width}x{rc.surface_height}, "
            f"cells {rc.cell_width}x{rc.cell_height}, "
            f"padding ({rc.pad_x}, {rc.pad_y}), mode={rc.mode.value}"
        )

    def _open_window(self) -> pygame.Surface:
        """Create the window, falling back to the headless driver."""
        flags = pygame.FULLSCREEN if self.config.fullscreen else 0
        try:
            window = pygame.display.set_mode(self.config.surface_size, flags)
            logger.info(f"Using SDL video driver: {pygame.display.get_driver()}")
            return window
        except pygame.error as e:
            logger.warning(f"SDL video initialization failed: {e}")
            logger.info("Falling back to dummy driver (no visible output)")
            os.environ['SDL_VIDEODRIVER'] = 'dummy'
            pygame.display.quit()
            pygame.display.init()
            return pygame.display.set_mode(self.config.surface_size)

    def run(self, image: bytes) -> None:
        """
        Load the image and run the frame loop until quit.

        Raises:
            LoadError, StepError, RenderError: From the driver
        """
        asyncio.run(self.driver.launch(image))

    def _after_frame(self, driver: FrameDriver) -> None:
        """Frame hook: handle input and show the frame."""
        self._process_events()
        self._present()

        if self.config.show_fps and driver.frame_count % 30 == 0:
            pygame.display.set_caption(f"CHIP-8 - {driver.fps:.0f} FPS")

    def _process_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.driver.stop()
                return

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.driver.stop()
                return

            forward_key_event(event, self.driver.vm)

    def _present(self) -> None:
        """Blit the offscreen surface to the window, centered."""
        window_w, window_h = self.window.get_size()
        surface_w, surface_h = self.surface.size
        self.window.fill(self.config.background_color)
        self.window.blit(
            self.surface.surface,
            ((window_w - surface_w) // 2, (window_h - surface_h) // 2)
        )
        pygame.display.flip()

    def cleanup(self) -> None:
        """Clean up resources."""
        if self.driver.running:
            self.driver.stop()
        pygame.quit()
