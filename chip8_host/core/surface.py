"""
Display surfaces.

A display surface is a fixed-size pixel target whose only primitive is
"fill this rectangle with a paint", where a paint is either a solid
colour or a RadialGradient.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Tuple, Union

import numpy as np
import pygame

from ..config import RGB
from ..errors import RenderError
from .gradient import RadialGradient

logger = logging.getLogger(__name__)


Paint = Union[RGB, RadialGradient]
RectLike = Tuple[float, float, int, int]


def snap_rect(rect: RectLike) -> pygame.Rect:
    """
    Snap a rectangle with fractional origin to the pixel grid.

    Origins are floored so rectangles sharing a fractional part keep
    abutting without gaps or overlaps.
    """
    x, y, w, h = rect
    return pygame.Rect(math.floor(x), math.floor(y), int(w), int(h))


class DisplaySurface(ABC):
    """Abstract pixel-addressable drawing target."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        pass

    @abstractmethod
    def fill_rect(self, rect: RectLike, paint: Paint) -> None:
        """
        Fill a rectangle.

        Args:
            rect: (x, y, width, height), origin may be fractional
            paint: Solid RGB colour or RadialGradient

        Raises:
            RenderError: If the surface cannot be painted
        """
        pass


class PygameSurface(DisplaySurface):
    """
    Display surface backed by an offscreen pygame.Surface.

    Works without a display; the application blits it to the window.
    """

    def __init__(self, size: Tuple[int, int]):
        """
        Initialize surface.

        Args:
            size: (width, height) in pixels
        """
        self._surface = pygame.Surface(size)

    @property
    def size(self) -> Tuple[int, int]:
        return self._surface.get_size()

    @property
    def surface(self) -> pygame.Surface:
        """Underlying pygame surface."""
        return self._surface

    def fill_rect(self, rect: RectLike, paint: Paint) -> None:
        target = snap_rect(rect)
        try:
            if isinstance(paint, RadialGradient):
                block = paint.rasterize(target.x, target.y, target.w, target.h)
                tile = pygame.surfarray.make_surface(np.ascontiguousarray(block))
                self._surface.blit(tile, target.topleft)
            else:
                self._surface.fill(paint, target)
        except (pygame.error, ValueError) as e:
            raise RenderError(f"Failed to fill {tuple(target)}: {e}") from e

    def get_at(self, x: int, y: int) -> RGB:
        """Read back one pixel (no alpha)."""
        color = self._surface.get_at((x, y))
        return (color.r, color.g, color.b)
