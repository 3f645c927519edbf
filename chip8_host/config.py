"""
Application configuration.

All configuration values are centralized here for easy management
and environment-specific overrides.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# Type aliases
RGB = Tuple[int, int, int]

# Logical display grid (fixed for the lifetime of the driver)
GRID_WIDTH = 64
GRID_HEIGHT = 32

# Phosphor green (#00F200) glowing out of a black background
GLOW_COLOR: RGB = (0, 242, 0)
BACKGROUND_COLOR: RGB = (0, 0, 0)


class RenderMode(Enum):
    """How active cells are filled."""
    WINDOW_GRADIENT = "window"     # One cached glow across the whole surface
    PER_CELL_GRADIENT = "cell"     # Fresh glow centered on every cell, every frame


@dataclass(frozen=True)
class RenderConfig:
    """
    Grid geometry on the physical surface.

    Cells are integer-sized; the leftover pixels are split evenly on both
    sides so the grid is centered.
    """

    surface_width: int
    surface_height: int
    cell_width: int
    cell_height: int
    pad_x: float
    pad_y: float
    mode: RenderMode = RenderMode.WINDOW_GRADIENT
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT

    @classmethod
    def from_surface(
        cls,
        width: int,
        height: int,
        mode: RenderMode = RenderMode.WINDOW_GRADIENT
    ) -> "RenderConfig":
        """
        Derive the grid geometry for a surface.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels
            mode: Fill strategy for active cells

        Returns:
            RenderConfig for that surface
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")

        cell_width = width // GRID_WIDTH
        cell_height = height // GRID_HEIGHT
        return cls(
            surface_width=width,
            surface_height=height,
            cell_width=cell_width,
            cell_height=cell_height,
            pad_x=(width - cell_width * GRID_WIDTH) / 2,
            pad_y=(height - cell_height * GRID_HEIGHT) / 2,
            mode=mode,
        )

    @property
    def grid_rect(self) -> Tuple[float, float, int, int]:
        """Rectangle covering the whole logical grid."""
        return (
            self.pad_x,
            self.pad_y,
            self.cell_width * self.grid_width,
            self.cell_height * self.grid_height,
        )

    def cell_rect(self, x: int, y: int) -> Tuple[float, float, int, int]:
        """Physical rectangle of logical cell (x, y)."""
        return (
            self.pad_x + x * self.cell_width,
            self.pad_y + y * self.cell_height,
            self.cell_width,
            self.cell_height,
        )


@dataclass
class Config:
    """Main application configuration."""

    # ─────────────────────────────────────────────────────────────────────────
    # Display Settings
    # ─────────────────────────────────────────────────────────────────────────

    # Surface size (10x10 pixel cells by default)
    surface_width: int = 640
    surface_height: int = 320

    # Fullscreen mode
    fullscreen: bool = False

    # Glow strategy for lit cells
    render_mode: RenderMode = RenderMode.WINDOW_GRADIENT

    # Target frame rate (0 = as fast as the event loop allows)
    target_fps: int = 0

    # Inner gradient stop (#00F200) and background
    glow_color: RGB = GLOW_COLOR
    background_color: RGB = BACKGROUND_COLOR

    # ─────────────────────────────────────────────────────────────────────────
    # Engine Settings
    # ─────────────────────────────────────────────────────────────────────────

    # Built-in engine name or "package.module:Class"
    engine: str = "demo"

    # ─────────────────────────────────────────────────────────────────────────
    # Development Settings
    # ─────────────────────────────────────────────────────────────────────────

    # Development mode (debug logging, FPS in caption)
    dev_mode: bool = False

    # Show FPS in the window caption
    show_fps: bool = False

    # Log an ASCII dump of the grid every frame (very slow)
    dump_frames: bool = False

    # ─────────────────────────────────────────────────────────────────────────
    # Computed Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def surface_size(self) -> Tuple[int, int]:
        """Get surface size as tuple."""
        return (self.surface_width, self.surface_height)

    @property
    def frame_interval(self) -> float:
        """Minimum seconds between frames (0 when uncapped)."""
        if self.target_fps <= 0:
            return 0.0
        return 1.0 / self.target_fps

    def render_config(self) -> RenderConfig:
        """Build the grid geometry for the configured surface."""
        return RenderConfig.from_surface(
            self.surface_width,
            self.surface_height,
            self.render_mode
        )

    def __post_init__(self):
        """Apply dev mode defaults."""
        if self.dev_mode:
            self.show_fps = True


# Default configuration instances
DEFAULT_CONFIG = Config()
DEV_CONFIG = Config(dev_mode=True)
