"""
Radial gradients for the phosphor glow.

A RadialGradient is a paint: it knows the colour of every surface pixel
from its distance to the centre, between two concentric circles. Pixels
inside the inner circle take the first stop, pixels beyond the outer
circle the last one.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import BACKGROUND_COLOR, RGB

logger = logging.getLogger(__name__)


# Glow radii as fractions of the reference radius
GLOW_INNER = 0.03
GLOW_OUTER = 0.9

ColorStop = Tuple[float, RGB]


class RadialGradient:
    """
    Two-circle radial gradient sharing one centre.

    Rasterized blocks are x-major (width, height, 3) uint8 arrays, ready
    for pygame.surfarray.
    """

    def __init__(
        self,
        center_x: float,
        center_y: float,
        inner_radius: float,
        outer_radius: float,
        stops: Sequence[ColorStop]
    ):
        """
        Initialize gradient.

        Args:
            center_x, center_y: Centre in surface coordinates
            inner_radius: Distance where the first stop applies
            outer_radius: Distance where the last stop applies
            stops: (offset, rgb) pairs with offsets in [0, 1], ascending
        """
        if len(stops) < 2:
            raise ValueError("A gradient needs at least two colour stops")
        if outer_radius < inner_radius:
            raise ValueError("Outer radius must not be smaller than inner radius")

        self.center = (float(center_x), float(center_y))
        self.inner_radius = float(inner_radius)
        self.outer_radius = float(outer_radius)
        self.stops: Tuple[ColorStop, ...] = tuple(
            (float(offset), tuple(color)) for offset, color in stops
        )

        self._offsets = np.array([s[0] for s in self.stops], dtype=np.float64)
        self._channels = np.array([s[1] for s in self.stops], dtype=np.float64)

        # Full-surface field, filled by prepare()
        self._field: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        cx, cy = self.center
        return (
            f"RadialGradient(center=({cx:.1f}, {cy:.1f}), "
            f"r={self.inner_radius:.2f}..{self.outer_radius:.2f})"
        )

    def _offset_at(self, distance: np.ndarray) -> np.ndarray:
        """Map distances from the centre to gradient offsets in [0, 1]."""
        span = self.outer_radius - self.inner_radius
        if span <= 0:
            return (distance > self.inner_radius).astype(np.float64)
        return np.clip((distance - self.inner_radius) / span, 0.0, 1.0)

    def _shade(self, t: np.ndarray) -> np.ndarray:
        """Interpolate colour stops at offsets t, adding a channel axis."""
        out = np.empty(t.shape + (3,), dtype=np.uint8)
        for c in range(3):
            channel = np.interp(t, self._offsets, self._channels[:, c])
            out[..., c] = np.rint(channel).astype(np.uint8)
        return out

    def color_at(self, x: float, y: float) -> RGB:
        """Colour at a single surface point."""
        distance = math.hypot(x - self.center[0], y - self.center[1])
        shaded = self._shade(self._offset_at(np.array([distance])))[0]
        return (int(shaded[0]), int(shaded[1]), int(shaded[2]))

    def rasterize(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """
        Colour every pixel of a block, sampled at pixel centres.

        Args:
            x, y: Top-left pixel of the block
            width, height: Block size in pixels

        Returns:
            (width, height, 3) uint8 array
        """
        field = self._field
        if (field is not None and x >= 0 and y >= 0
                and x + width <= field.shape[0] and y + height <= field.shape[1]):
            return field[x:x + width, y:y + height]

        xs = np.arange(x, x + width, dtype=np.float64)[:, np.newaxis] + 0.5
        ys = np.arange(y, y + height, dtype=np.float64)[np.newaxis, :] + 0.5
        distance = np.sqrt((xs - self.center[0]) ** 2 + (ys - self.center[1]) ** 2)
        return self._shade(self._offset_at(distance))

    def prepare(self, width: int, height: int) -> None:
        """Precompute the whole surface so later blocks are slices."""
        self._field = None
        self._field = self.rasterize(0, 0, width, height)
        logger.debug(f"Prepared {self!r} for {width}x{height}")


def build_glow(
    center_x: float,
    center_y: float,
    radius: float,
    inner_color: RGB,
    outer_color: RGB = BACKGROUND_COLOR
) -> RadialGradient:
    """
    Build the phosphor glow: bright at 3% of radius, dark at 90%.

    Args:
        center_x, center_y: Glow centre
        radius: Reference radius the glow fractions apply to
        inner_color: Colour at the centre
        outer_color: Colour at the rim

    Returns:
        New RadialGradient
    """
    return RadialGradient(
        center_x,
        center_y,
        radius * GLOW_INNER,
        radius * GLOW_OUTER,
        [(0.0, inner_color), (1.0, outer_color)]
    )


class GradientCache:
    """
    Holds the one whole-surface glow.

    Built on first request and kept for the lifetime of the program;
    the surface size never changes. Per-cell glows are never cached.
    """

    def __init__(self, inner_color: RGB, outer_color: RGB = BACKGROUND_COLOR):
        self.inner_color = inner_color
        self.outer_color = outer_color
        self._window: Optional[RadialGradient] = None
        self.builds = 0

    @property
    def is_built(self) -> bool:
        return self._window is not None

    def window_gradient(self, width: int, height: int) -> RadialGradient:
        """
        Get the surface-wide glow, building it on first use.

        Args:
            width, height: Surface size

        Returns:
            The cached RadialGradient
        """
        if self._window is None:
            self._window = build_glow(
                width / 2,
                height / 2,
                max(width, height),
                self.inner_color,
                self.outer_color
            )
            self._window.prepare(width, height)
            self.builds += 1
            logger.info(f"Built window glow {self._window!r}")
        return self._window
