"""
Recording surface for tests.

Records every fill instead of drawing, so tests can check exactly which
rectangles were painted and with which paint object.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import RenderError
from .gradient import RadialGradient
from .surface import DisplaySurface, Paint, RectLike


@dataclass
class FillCall:
    """One recorded fill_rect call."""
    rect: RectLike
    paint: Paint

    @property
    def is_gradient(self) -> bool:
        return isinstance(self.paint, RadialGradient)


class RecordingSurface(DisplaySurface):
    """
    Surface that only records fills.

    Args:
        width, height: Reported size
        fail_after: Raise RenderError on this many-th fill (1-based)
    """

    def __init__(self, width: int, height: int, fail_after: Optional[int] = None):
        self._size = (width, height)
        self._fail_after = fail_after
        self.fills: List[FillCall] = []

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def fill_rect(self, rect: RectLike, paint: Paint) -> None:
        if self._fail_after is not None and len(self.fills) + 1 >= self._fail_after:
            raise RenderError("Scripted paint failure")
        self.fills.append(FillCall(tuple(rect), paint))

    # ─────────────────────────────────────────────────────────────────────────
    # Testing helpers
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def gradient_fills(self) -> List[FillCall]:
        """Fills that used a gradient (lit cells)."""
        return [f for f in self.fills if f.is_gradient]

    @property
    def solid_fills(self) -> List[FillCall]:
        """Fills with a solid colour (background clears)."""
        return [f for f in self.fills if not f.is_gradient]

    def clear(self) -> None:
        """Forget recorded fills."""
        self.fills.clear()
