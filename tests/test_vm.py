import pytest

from chip8_host.errors import LoadError, StepError
from chip8_host.image import SAMPLE_IMAGE, decode
from chip8_host.vm import DemoVM, MockVM, VMHandle, create_engine, format_display
from chip8_host.vm.demo import MEMORY_SIZE, PROGRAM_OFFSET, SCROLL_TICKS


def row_bits(vm, y):
    return [vm.is_pixel_set(x, y) for x in range(64)]


def test_demo_rejects_oversized_image():
    vm = DemoVM()
    with pytest.raises(LoadError):
        vm.load(bytes(MEMORY_SIZE - PROGRAM_OFFSET + 1))


def test_demo_accepts_full_capacity():
    vm = DemoVM()
    vm.load(bytes(vm.capacity))
    assert vm.program_size == 3584


def test_demo_step_before_load():
    with pytest.raises(StepError):
        DemoVM().step()


def test_demo_shows_program_bytes():
    vm = DemoVM()
    vm.load(decode(SAMPLE_IMAGE))
    # 0x6E = 0110 1110
    assert row_bits(vm, 0)[:8] == [False, True, True, False, True, True, True, False]


def test_demo_timer_counts_down_at_60hz():
    vm = DemoVM()
    vm.load(b"\xff")
    assert vm.delay_timer == SCROLL_TICKS
    vm.advance_time(0.05)
    assert vm.delay_timer == pytest.approx(SCROLL_TICKS - 3)
    vm.advance_time(10.0)
    assert vm.delay_timer == 0.0


def test_demo_scrolls_when_timer_expires():
    vm = DemoVM()
    vm.load(b"\xff" * 8)
    assert all(row_bits(vm, 0))

    vm.step()                       # timer still running
    assert all(row_bits(vm, 0))

    vm.advance_time(1.0)
    vm.step()                       # scrolls one row
    assert not any(row_bits(vm, 0))
    assert vm.delay_timer == SCROLL_TICKS


def test_demo_keypad_scrolls_back():
    vm = DemoVM()
    vm.load(b"\xff" * 8)
    vm.press_key(0x2)
    vm.advance_time(1.0)
    vm.step()
    # Row above the program is empty, program moved down a row
    assert not any(row_bits(vm, 0))
    assert all(row_bits(vm, 1))
    vm.release_key(0x2)


def test_demo_keypad_fast_forward():
    vm = DemoVM()
    vm.load(b"")
    start = vm.row_offset
    vm.press_key(0x8)
    vm.step()
    vm.step()
    assert vm.row_offset == start + 2


def test_format_display():
    vm = MockVM(lit={(0, 0), (63, 31)})
    text = format_display(vm)
    lines = text.splitlines()
    assert len(lines) == 32
    assert all(len(line) == 64 for line in lines)
    assert lines[0].startswith("#_")
    assert lines[31].endswith("_#")


def test_mock_vm_rejects_out_of_range_query():
    with pytest.raises(AssertionError):
        MockVM().is_pixel_set(64, 0)


def test_create_builtin_engine():
    assert isinstance(create_engine("demo"), DemoVM)


def test_create_engine_from_path():
    vm = create_engine("chip8_host.vm.mock_vm:MockVM")
    assert isinstance(vm, MockVM)
    assert vm.name == "MockVM"


@pytest.mark.parametrize("name", [
    "nope",
    "chip8_host.vm.mock_vm:Missing",
    "no_such_module_xyz:Engine",
    "chip8_host.config:Config",
])
def test_create_engine_errors(name):
    with pytest.raises(ValueError):
        create_engine(name)


def test_vm_handle_is_abstract():
    with pytest.raises(TypeError):
        VMHandle()
