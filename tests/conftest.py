"""Shared fixtures. pygame runs headless for the whole suite."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from chip8_host.config import RenderConfig, RenderMode
from chip8_host.core.clock import FrameClock
from chip8_host.core.driver import FrameDriver
from chip8_host.core.mock_surface import RecordingSurface
from chip8_host.core.renderer import GridRenderer
from chip8_host.vm.mock_vm import MockVM


class FakeTime:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def surface():
    return RecordingSurface(640, 320)


def _make_driver(vm, surface, mode=RenderMode.WINDOW_GRADIENT, time_source=None, **kwargs):
    """Driver over a recording surface with the surface's geometry."""
    width, height = surface.size
    renderer = GridRenderer(RenderConfig.from_surface(width, height, mode), surface)
    clock = FrameClock(time_source) if time_source else None
    return FrameDriver(vm, renderer, clock=clock, **kwargs)


@pytest.fixture
def make_driver():
    return _make_driver


@pytest.fixture
def driver_factory(surface, fake_time):
    def factory(vm=None, mode=RenderMode.WINDOW_GRADIENT, **kwargs):
        return _make_driver(vm or MockVM(), surface, mode, fake_time, **kwargs)
    return factory
