"""
CHIP-8 host driver.

Drives a CHIP-8 engine frame by frame and shows its 64x32 display as a
glowing phosphor raster.
"""

__version__ = "1.0.0"

from .errors import Chip8HostError, DecodeError, DecodeFailure, LoadError, StepError, RenderError
from .image import decode, encode

__all__ = [
    "Chip8HostError",
    "DecodeError",
    "DecodeFailure",
    "LoadError",
    "StepError",
    "RenderError",
    "decode",
    "encode",
]
