"""
Mock engine - Testing implementation of VMHandle.

Allows programmatic control of the display bitmap and failures,
and inspection of every call the driver makes.

Usage:
    vm = MockVM(lit={(0, 0)})

    # Run code under test...

    # Verify calls
    assert vm.calls[:2] == ["load", "step"]
    assert vm.dt_history == [0.1]
"""

import logging
from typing import Callable, Iterable, List, Optional, Set, Tuple

from ..errors import LoadError, StepError
from .handle import VMHandle

logger = logging.getLogger(__name__)


class MockVM(VMHandle):
    """
    Mock engine for testing.

    Records calls in order. Pixel state comes from a set of lit cells or
    a predicate.
    """

    def __init__(
        self,
        lit: Iterable[Tuple[int, int]] = (),
        pixel_fn: Optional[Callable[[int, int], bool]] = None,
        capacity: Optional[int] = None,
        fail_on_step: Optional[int] = None
    ):
        """
        Initialize mock engine.

        Args:
            lit: Cells reported as set
            pixel_fn: Predicate overriding `lit`
            capacity: Largest image load() accepts (None = unlimited)
            fail_on_step: 1-based step number that raises StepError
        """
        self._lit: Set[Tuple[int, int]] = set(lit)
        self._pixel_fn = pixel_fn
        self._capacity = capacity
        self._fail_on_step = fail_on_step

        self.calls: List[str] = []
        self.image: Optional[bytes] = None
        self.step_count = 0
        self.dt_history: List[float] = []
        self.pixel_queries = 0
        self.keys_down: Set[int] = set()

    def load(self, image: bytes) -> None:
        self.calls.append("load")
        if self._capacity is not None and len(image) > self._capacity:
            raise LoadError(
                f"Image of {len(image)} bytes exceeds capacity {self._capacity}"
            )
        self.image = bytes(image)

    def step(self) -> None:
        self.calls.append("step")
        self.step_count += 1
        if self._fail_on_step is not None and self.step_count >= self._fail_on_step:
            raise StepError(f"Scripted failure on step {self.step_count}")

    def is_pixel_set(self, x: int, y: int) -> bool:
        if not (0 <= x < 64 and 0 <= y < 32):
            raise AssertionError(f"Pixel query out of range: ({x}, {y})")
        self.pixel_queries += 1
        if self._pixel_fn is not None:
            return self._pixel_fn(x, y)
        return (x, y) in self._lit

    def advance_time(self, dt: float) -> None:
        self.calls.append("advance_time")
        self.dt_history.append(dt)

    def press_key(self, key: int) -> None:
        self.keys_down.add(key)

    def release_key(self, key: int) -> None:
        self.keys_down.discard(key)

    # ─────────────────────────────────────────────────────────────────────────
    # Testing helpers
    # ─────────────────────────────────────────────────────────────────────────

    def set_lit(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Replace the set of lit cells."""
        self._lit = set(cells)
        self._pixel_fn = None

    @property
    def frame_calls(self) -> List[str]:
        """Calls made after load()."""
        return [c for c in self.calls if c != "load"]
