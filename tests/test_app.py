import pygame
import pytest

from chip8_host.config import Config, RenderMode
from chip8_host.core.app import Application
from chip8_host.core.driver import DriverState
from chip8_host.errors import LoadError
from chip8_host.vm.mock_vm import MockVM


@pytest.fixture
def app_factory():
    apps = []

    def factory(vm, **config):
        app = Application(Config(surface_width=128, surface_height=64, **config), vm)
        apps.append(app)
        return app

    yield factory
    for app in apps:
        app.cleanup()


def test_quit_event_stops_after_current_frame(app_factory):
    vm = MockVM(lit={(0, 0)})
    app = app_factory(vm)
    pygame.event.post(pygame.event.Event(pygame.QUIT))

    app.run(b"\x00\xe0")

    assert app.driver.state is DriverState.STOPPED
    assert app.driver.frame_count == 1
    assert vm.frame_calls == ["step", "advance_time"]


def test_frames_reach_the_window(app_factory):
    vm = MockVM(lit={(32, 16)})
    app = app_factory(vm, render_mode=RenderMode.PER_CELL_GRADIENT)

    def stop(driver):
        if driver.frame_count >= 2:
            driver.stop()

    app.driver.add_frame_hook(stop)
    app.run(b"")

    # 2x2 cells, cell (32, 16) starts at the window centre
    assert app.window.get_at((64, 32)).g > 0
    assert tuple(app.window.get_at((10, 10)))[:3] == (0, 0, 0)


def test_keys_reach_engine(app_factory):
    vm = MockVM()
    app = app_factory(vm)
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))

    app.run(b"")

    assert vm.keys_down == {0x5}
    assert app.driver.state is DriverState.STOPPED


def test_load_failure_propagates(app_factory):
    vm = MockVM(capacity=0)
    app = app_factory(vm)
    with pytest.raises(LoadError):
        app.run(b"\x00")
    assert vm.step_count == 0
