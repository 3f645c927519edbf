"""
Demo engine that generates a display without interpreting instructions.

For trying the host without a real interpreter. The loaded image is
shown as a bitmap (8 bytes per row, MSB first) scrolling through memory
at a pace set by a 60 Hz delay timer.
"""

import logging
from typing import List

from ..config import GRID_WIDTH, GRID_HEIGHT
from ..errors import LoadError, StepError
from .handle import VMHandle

logger = logging.getLogger(__name__)


MEMORY_SIZE = 4096
FONT_OFFSET = 0x000
PROGRAM_OFFSET = 0x200

# Timers count down at this rate
TIMER_HZ = 60.0

# Delay timer ticks between scrolled rows
SCROLL_TICKS = 6

BYTES_PER_ROW = GRID_WIDTH // 8

# Hex digit sprites 0-F, 4x5 pixels each
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# Keypad keys that steer the scroll (2 = up, 8 = down)
KEY_SCROLL_BACK = 0x2
KEY_SCROLL_FORWARD = 0x8


class DemoVM(VMHandle):
    """
    Memory viewer standing in for a real interpreter.

    Each step scrolls one row once the delay timer has run out. Holding
    keypad 2 scrolls backwards; keypad 8 skips the timer.
    """

    def __init__(self):
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_OFFSET:FONT_OFFSET + len(FONT)] = FONT
        self.delay_timer = 0.0
        self.program_size = 0
        self.row_offset = 0
        self.steps = 0
        self._loaded = False
        self._keys = [False] * 16
        self._display: List[bool] = [False] * (GRID_WIDTH * GRID_HEIGHT)

    @property
    def capacity(self) -> int:
        """Largest image that fits above the program start address."""
        return MEMORY_SIZE - PROGRAM_OFFSET

    def load(self, image: bytes) -> None:
        if len(image) > self.capacity:
            raise LoadError(
                f"Image of {len(image)} bytes does not fit in {self.capacity} bytes"
            )

        self.memory[PROGRAM_OFFSET:PROGRAM_OFFSET + len(image)] = image
        self.program_size = len(image)
        self.row_offset = PROGRAM_OFFSET // BYTES_PER_ROW
        self.delay_timer = float(SCROLL_TICKS)
        self._loaded = True
        self._refresh_display()
        logger.info(f"Loaded {len(image) // 2} instructions.")

    def step(self) -> None:
        if not self._loaded:
            raise StepError("No program loaded")

        self.steps += 1

        if self._keys[KEY_SCROLL_FORWARD]:
            self.delay_timer = 0.0

        if self.delay_timer > 0.0:
            return

        direction = -1 if self._keys[KEY_SCROLL_BACK] else 1
        total_rows = MEMORY_SIZE // BYTES_PER_ROW
        self.row_offset = (self.row_offset + direction) % total_rows
        self.delay_timer = float(SCROLL_TICKS)
        self._refresh_display()

    def is_pixel_set(self, x: int, y: int) -> bool:
        return self._display[y * GRID_WIDTH + x]

    def advance_time(self, dt: float) -> None:
        if self.delay_timer > 0.0:
            self.delay_timer -= dt * TIMER_HZ
        if self.delay_timer < 0.0:
            self.delay_timer = 0.0

    def press_key(self, key: int) -> None:
        self._keys[key & 0xF] = True

    def release_key(self, key: int) -> None:
        self._keys[key & 0xF] = False

    def _refresh_display(self) -> None:
        """Rebuild the bitmap from the visible memory window."""
        total_rows = MEMORY_SIZE // BYTES_PER_ROW
        for y in range(GRID_HEIGHT):
            row = (self.row_offset + y) % total_rows
            base = row * BYTES_PER_ROW
            for col in range(BYTES_PER_ROW):
                byte = self.memory[base + col]
                for bit in range(8):
                    x = col * 8 + bit
                    self._display[y * GRID_WIDTH + x] = bool((byte << bit) & 0x80)
