"""
Frame driver.

Owns the engine and runs the frame loop:

    step -> render -> advance_time(dt) -> reschedule

as a cooperative asyncio task. The only suspension point is the
reschedule at the end of each frame, so frames never interleave.
"""

import asyncio
import logging
from enum import Enum, auto
from typing import Callable, List, Optional

from ..vm.handle import VMHandle, format_display
from .clock import FrameClock
from .renderer import GridRenderer

logger = logging.getLogger(__name__)


class DriverState(Enum):
    """Lifecycle of a FrameDriver."""
    IDLE = auto()      # Constructed, nothing loaded
    RUNNING = auto()   # Image loaded, frames being scheduled
    STOPPED = auto()   # Loop left after stop()
    FAILED = auto()    # Loop aborted by an error


FrameHook = Callable[["FrameDriver"], None]


class FrameDriver:
    """
    Drives an engine frame by frame.

    Holds everything the loop touches: the engine, the renderer (with its
    gradient cache) and the frame clock. Errors from the engine or the
    surface end the loop and propagate to whoever awaited run().
    """

    def __init__(
        self,
        vm: VMHandle,
        renderer: GridRenderer,
        clock: Optional[FrameClock] = None,
        frame_interval: float = 0.0,
        dump_frames: bool = False
    ):
        """
        Initialize the driver.

        Args:
            vm: Engine, owned by the driver from now on
            renderer: Paints the display grid each frame
            clock: Frame clock (monotonic wall clock by default)
            frame_interval: Minimum seconds per frame, 0 for no cap
            dump_frames: Log the grid as text after each frame (DEBUG)
        """
        self.vm = vm
        self.renderer = renderer
        self.clock = clock or FrameClock()
        self.frame_interval = max(0.0, frame_interval)
        self.dump_frames = dump_frames

        self.state = DriverState.IDLE
        self.frame_count = 0
        self.last_dt = 0.0
        self.fps = 0.0

        self._stop_requested = False
        self._hooks: List[FrameHook] = []

    @property
    def running(self) -> bool:
        return self.state == DriverState.RUNNING

    def add_frame_hook(self, hook: FrameHook) -> None:
        """
        Call `hook(driver)` at the end of every frame, before rescheduling.

        Hooks run inside the frame; an exception aborts the loop.
        """
        self._hooks.append(hook)

    def start(self, image: bytes) -> None:
        """
        Load the program image and enter RUNNING.

        Args:
            image: Raw program bytes

        Raises:
            LoadError: If the engine rejects the image (driver stays IDLE)
            RuntimeError: If the driver was already started
        """
        if self.state != DriverState.IDLE:
            raise RuntimeError(f"Driver already started (state={self.state.name})")

        try:
            self.vm.load(image)
        except Exception as e:
            logger.error(f"Engine {self.vm.name} rejected image: {e}")
            raise

        self.clock.reset()
        self.state = DriverState.RUNNING
        logger.info(f"Driver running {self.vm.name} with a {len(image)} byte image")

    def stop(self) -> None:
        """Ask the loop to exit at the next reschedule boundary."""
        if not self._stop_requested:
            logger.info("Stop requested")
        self._stop_requested = True

    def run_frame(self) -> None:
        """Execute exactly one frame."""
        self.vm.step()

        self.renderer.render(self.vm)

        dt = self.clock.tick()
        self.vm.advance_time(dt)

        self.frame_count += 1
        self.last_dt = dt
        if dt > 0:
            # Smoothed for display only
            self.fps = 1.0 / dt if self.fps == 0.0 else self.fps * 0.9 + 0.1 / dt

        if self.dump_frames and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Frame {self.frame_count}:\n{format_display(self.vm)}")

        for hook in self._hooks:
            hook(self)

    async def run(self) -> None:
        """
        Run frames until stop() is called or a frame fails.

        Raises:
            StepError, RenderError: Re-raised from the failing frame
            RuntimeError: If start() has not succeeded
        """
        if self.state != DriverState.RUNNING:
            raise RuntimeError(f"Driver is not running (state={self.state.name})")

        while not self._stop_requested:
            frame_start = self.clock.now()
            try:
                self.run_frame()
            except Exception as e:
                self.state = DriverState.FAILED
                logger.error(f"Frame {self.frame_count + 1} failed: {e}")
                raise

            if self._stop_requested:
                break

            # Reschedule: yield to the event loop, no cap unless configured
            delay = 0.0
            if self.frame_interval:
                delay = max(0.0, self.frame_interval - (self.clock.now() - frame_start))
            await asyncio.sleep(delay)

        self.state = DriverState.STOPPED
        logger.info(f"Driver stopped after {self.frame_count} frames")

    async def launch(self, image: bytes) -> None:
        """start() then run()."""
        self.start(image)
        await self.run()
