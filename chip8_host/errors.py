"""
Error types raised by the host driver.

Every failure the driver can surface derives from Chip8HostError so the
entry point can report it in one place.
"""

from enum import Enum


class Chip8HostError(Exception):
    """Base class for all host driver errors."""


class DecodeFailure(Enum):
    """Why an encoded program image was rejected."""
    INVALID_CHARACTER = "invalid_character"
    INVALID_LENGTH = "invalid_length"


class DecodeError(Chip8HostError):
    """
    Encoded program image could not be decoded.

    Attributes:
        reason: Which rule of the transport encoding was violated
    """

    def __init__(self, reason: DecodeFailure, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


class LoadError(Chip8HostError):
    """Engine refused the program image (fatal at startup)."""


class StepError(Chip8HostError):
    """Engine failed to execute a unit of work (fatal in the loop)."""


class RenderError(Chip8HostError):
    """Painting the display surface failed (fatal in the loop)."""
