"""
Grid renderer.

Paints the engine's 64x32 display onto a display surface as glowing
cells, using the configured RenderMode.
"""

import logging

from ..config import BACKGROUND_COLOR, GLOW_COLOR, RGB, RenderConfig, RenderMode
from ..vm.handle import VMHandle
from .gradient import GradientCache, RadialGradient, build_glow
from .surface import DisplaySurface

logger = logging.getLogger(__name__)


class GridRenderer:
    """
    Draws one frame of the display grid.

    The bitmap is read from the engine cell by cell on every frame; nothing
    about it is kept between frames.
    """

    def __init__(
        self,
        config: RenderConfig,
        surface: DisplaySurface,
        glow_color: RGB = GLOW_COLOR,
        background_color: RGB = BACKGROUND_COLOR
    ):
        """
        Initialize the renderer.

        Args:
            config: Grid geometry and render mode
            surface: Target surface, owned by this renderer
            glow_color: Inner gradient stop
            background_color: Grid background and outer gradient stop
        """
        self.config = config
        self.surface = surface
        self.glow_color = glow_color
        self.background_color = background_color
        self.gradients = GradientCache(glow_color, background_color)

        if surface.size != (config.surface_width, config.surface_height):
            logger.warning(
                f"Surface is {surface.size[0]}x{surface.size[1]} but geometry "
                f"was derived for {config.surface_width}x{config.surface_height}"
            )

    def render(self, vm: VMHandle) -> int:
        """
        Clear the grid and paint every lit cell in row-major order.

        Args:
            vm: Engine to read the bitmap from

        Returns:
            Number of lit cells painted
        """
        cfg = self.config
        self.surface.fill_rect(cfg.grid_rect, self.background_color)

        lit = 0
        for y in range(cfg.grid_height):
            for x in range(cfg.grid_width):
                if vm.is_pixel_set(x, y):
                    rect = cfg.cell_rect(x, y)
                    self.surface.fill_rect(rect, self._paint_for(rect))
                    lit += 1
        return lit

    def _paint_for(self, rect) -> RadialGradient:
        """Pick the gradient for a lit cell."""
        mode = self.config.mode
        if mode is RenderMode.WINDOW_GRADIENT:
            return self.gradients.window_gradient(
                self.config.surface_width,
                self.config.surface_height
            )
        elif mode is RenderMode.PER_CELL_GRADIENT:
            # Rebuilt for every cell on every frame, never cached
            x, y, w, h = rect
            return build_glow(
                x + w / 2,
                y + h / 2,
                w,
                self.glow_color,
                self.background_color
            )
        raise ValueError(f"Unhandled render mode: {mode}")
