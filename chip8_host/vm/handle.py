"""
Engine contract.

The host never looks inside the emulation engine. Everything it needs
goes through this interface:
- Production: a real CHIP-8 interpreter
- Development: the built-in demo engine
- Testing: MockVM for unit tests

The driver owns its VMHandle exclusively and calls it from one thread.
"""

from abc import ABC, abstractmethod

from ..config import GRID_WIDTH, GRID_HEIGHT


class VMHandle(ABC):
    """
    Abstract emulation engine.

    Implementations raise LoadError from load() and StepError from step().
    """

    @abstractmethod
    def load(self, image: bytes) -> None:
        """
        Install a program image at the engine's start address.

        Args:
            image: Raw program bytes

        Raises:
            LoadError: If the image exceeds the engine's capacity
        """
        pass

    @abstractmethod
    def step(self) -> None:
        """
        Execute one unit of emulation work.

        Raises:
            StepError: If the engine cannot continue
        """
        pass

    @abstractmethod
    def is_pixel_set(self, x: int, y: int) -> bool:
        """
        Check a display cell.

        Args:
            x: Column in [0, 64)
            y: Row in [0, 32)
        """
        pass

    @abstractmethod
    def advance_time(self, dt: float) -> None:
        """
        Advance real-time subsystems (timers).

        Args:
            dt: Elapsed wall-clock seconds, never negative
        """
        pass

    # ─────────────────────────────────────────────────────────────────────────
    # Optional keypad hooks
    # ─────────────────────────────────────────────────────────────────────────

    def press_key(self, key: int) -> None:
        """Keypad key (0x0-0xF) went down. Ignored by engines without input."""
        pass

    def release_key(self, key: int) -> None:
        """Keypad key (0x0-0xF) went up."""
        pass

    @property
    def name(self) -> str:
        """Human-readable engine name."""
        return type(self).__name__


def format_display(vm: VMHandle) -> str:
    """
    Render the engine's display grid as text.

    Lit cells are '#', dark cells '_', one line per row.
    """
    rows = []
    for y in range(GRID_HEIGHT):
        rows.append("".join(
            "#" if vm.is_pixel_set(x, y) else "_"
            for x in range(GRID_WIDTH)
        ))
    return "\n".join(rows)
