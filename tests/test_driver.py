"""
Tests for the frame driver.

Verifies:
1. Frame order: step, render, advance_time
2. dt follows the wall clock
3. Load failure keeps the driver idle and never steps
4. Step and render failures stop the loop and propagate
5. stop() ends the loop at the reschedule boundary
"""

import asyncio

import pytest

from chip8_host.config import RenderMode
from chip8_host.core.driver import DriverState
from chip8_host.core.mock_surface import RecordingSurface
from chip8_host.errors import LoadError, RenderError, StepError
from chip8_host.vm.mock_vm import MockVM


def stop_after(frames):
    def hook(driver):
        if driver.frame_count >= frames:
            driver.stop()
    return hook


def test_start_loads_and_runs(driver_factory):
    vm = MockVM()
    driver = driver_factory(vm)
    assert driver.state is DriverState.IDLE

    driver.start(b"\x00\xe0")
    assert driver.state is DriverState.RUNNING
    assert vm.image == b"\x00\xe0"
    assert vm.calls == ["load"]


def test_frame_order(driver_factory, surface):
    order = []

    class OrderVM(MockVM):
        def is_pixel_set(self, x, y):
            if (x, y) == (0, 0):
                order.append("render")
            return super().is_pixel_set(x, y)

        def step(self):
            order.append("step")
            super().step()

        def advance_time(self, dt):
            order.append("advance_time")
            super().advance_time(dt)

    vm = OrderVM()
    driver = driver_factory(vm)
    driver.start(b"")
    driver.run_frame()
    driver.run_frame()

    assert order == ["step", "render", "advance_time"] * 2
    assert vm.pixel_queries == 2 * 64 * 32


def test_dt_measures_clock(driver_factory, fake_time):
    vm = MockVM()
    driver = driver_factory(vm)
    driver.start(b"")

    fake_time.advance(0.1)
    driver.run_frame()
    fake_time.advance(0.25)
    driver.run_frame()
    driver.run_frame()

    assert vm.dt_history[0] == pytest.approx(0.1, abs=1e-6)
    assert vm.dt_history[1] == pytest.approx(0.25, abs=1e-6)
    assert vm.dt_history[2] == 0.0


def test_dt_counts_from_start(driver_factory, fake_time):
    vm = MockVM()
    driver = driver_factory(vm)
    fake_time.advance(5.0)      # time spent idle is not emulated time
    driver.start(b"")
    fake_time.advance(0.1)
    driver.run_frame()
    assert vm.dt_history == [pytest.approx(0.1, abs=1e-6)]


def test_dt_never_negative(driver_factory, fake_time):
    vm = MockVM()
    driver = driver_factory(vm)
    driver.start(b"")
    fake_time.advance(-1.0)
    driver.run_frame()
    assert vm.dt_history == [0.0]


def test_single_lit_cell_per_frame(driver_factory, surface):
    driver = driver_factory(MockVM(lit={(0, 0)}))
    driver.start(b"")
    driver.run_frame()
    cells = surface.gradient_fills
    assert len(cells) == 1
    assert cells[0].rect == (0.0, 0.0, 10, 10)


def test_load_failure_stays_idle(driver_factory):
    vm = MockVM(capacity=1)
    driver = driver_factory(vm)

    with pytest.raises(LoadError):
        driver.start(b"\x00\x00")

    assert driver.state is DriverState.IDLE
    with pytest.raises(RuntimeError):
        asyncio.run(driver.run())
    assert vm.step_count == 0
    assert vm.calls == ["load"]


def test_start_twice_is_rejected(driver_factory):
    driver = driver_factory()
    driver.start(b"")
    with pytest.raises(RuntimeError):
        driver.start(b"")


def test_run_until_stopped(driver_factory):
    vm = MockVM()
    driver = driver_factory(vm)
    driver.add_frame_hook(stop_after(5))

    asyncio.run(driver.launch(b"\x12\x00"))

    assert driver.state is DriverState.STOPPED
    assert driver.frame_count == 5
    assert vm.frame_calls == ["step", "advance_time"] * 5


def test_stop_before_run_runs_no_frames(driver_factory):
    vm = MockVM()
    driver = driver_factory(vm)
    driver.start(b"")
    driver.stop()
    asyncio.run(driver.run())
    assert vm.step_count == 0
    assert driver.state is DriverState.STOPPED


def test_step_failure_stops_loop(driver_factory):
    vm = MockVM(fail_on_step=3)
    driver = driver_factory(vm)
    driver.add_frame_hook(stop_after(100))

    with pytest.raises(StepError):
        asyncio.run(driver.launch(b""))

    assert driver.state is DriverState.FAILED
    assert vm.step_count == 3
    assert driver.frame_count == 2
    # The failing frame never reached advance_time
    assert vm.frame_calls.count("advance_time") == 2


def test_render_failure_stops_loop(make_driver, fake_time):
    surface = RecordingSurface(640, 320, fail_after=2)
    vm = MockVM(lit={(0, 0)})
    driver = make_driver(vm, surface, time_source=fake_time)

    with pytest.raises(RenderError):
        asyncio.run(driver.launch(b""))

    assert driver.state is DriverState.FAILED
    assert vm.step_count == 1
    assert vm.dt_history == []


def test_hook_failure_stops_loop(driver_factory):
    vm = MockVM()
    driver = driver_factory(vm)

    def broken(_driver):
        raise RuntimeError("window closed under us")

    driver.add_frame_hook(broken)
    with pytest.raises(RuntimeError):
        asyncio.run(driver.launch(b""))
    assert driver.state is DriverState.FAILED
    assert vm.step_count == 1


def test_frames_do_not_interleave_with_other_tasks(driver_factory):
    events = []
    vm = MockVM()
    driver = driver_factory(vm)

    def hook(d):
        events.append(("frame", d.frame_count))
        if d.frame_count >= 3:
            d.stop()

    driver.add_frame_hook(hook)

    async def other():
        for i in range(3):
            events.append(("other", i))
            await asyncio.sleep(0)

    async def main():
        await asyncio.gather(driver.launch(b""), other())

    asyncio.run(main())

    frames = [e for e in events if e[0] == "frame"]
    assert frames == [("frame", 1), ("frame", 2), ("frame", 3)]
    # The other task got to run between frames
    assert events.index(("other", 0)) < events.index(("frame", 2))


def test_uncapped_reschedule_has_no_delay(driver_factory, monkeypatch):
    delays = []
    real_sleep = asyncio.sleep

    async def recording_sleep(delay, *args, **kwargs):
        delays.append(delay)
        await real_sleep(0)

    monkeypatch.setattr("chip8_host.core.driver.asyncio.sleep", recording_sleep)
    driver = driver_factory()
    driver.add_frame_hook(stop_after(4))
    asyncio.run(driver.launch(b""))

    # Last frame stops before rescheduling
    assert delays == [0.0, 0.0, 0.0]


def test_frame_cap_delays_reschedule(driver_factory, monkeypatch, fake_time):
    delays = []
    real_sleep = asyncio.sleep

    async def recording_sleep(delay, *args, **kwargs):
        delays.append(delay)
        await real_sleep(0)

    monkeypatch.setattr("chip8_host.core.driver.asyncio.sleep", recording_sleep)
    driver = driver_factory(frame_interval=0.05)

    def hook(d):
        fake_time.advance(0.02)     # frame work takes 20 ms
        if d.frame_count >= 2:
            d.stop()

    driver.add_frame_hook(hook)
    asyncio.run(driver.launch(b""))
    assert delays == [pytest.approx(0.03)]


def test_per_cell_mode_through_driver(driver_factory, surface):
    driver = driver_factory(MockVM(lit={(1, 1), (2, 2)}), mode=RenderMode.PER_CELL_GRADIENT)
    driver.start(b"")
    driver.run_frame()
    driver.run_frame()
    assert len({id(f.paint) for f in surface.gradient_fills}) == 4
