"""
Core engine module.

Contains the frame loop and rendering pipeline.
"""

from .app import Application
from .clock import FrameClock
from .driver import DriverState, FrameDriver
from .gradient import GradientCache, RadialGradient, build_glow
from .renderer import GridRenderer
from .surface import DisplaySurface, PygameSurface

__all__ = [
    "Application",
    "FrameClock",
    "DriverState",
    "FrameDriver",
    "GradientCache",
    "RadialGradient",
    "build_glow",
    "GridRenderer",
    "DisplaySurface",
    "PygameSurface",
]
