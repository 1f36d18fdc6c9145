import pytest

from dbgkit.dispd import Align, DisplayDevice, MemoryScreen


@pytest.fixture
def screen():
    # 10 characters per line, 3 lines
    return MemoryScreen(view_width=80, view_height=48, font_width=8, font_height=16)


@pytest.fixture
def device(screen):
    return DisplayDevice(screen)


def test_geometry_from_screen(device, screen):
    assert device.max_chars == 10
    assert device.max_lines == screen.max_lines
    assert len(device.lines) == device.max_lines


def test_line_spacing_not_needed_after_last_line():
    screen = MemoryScreen(80, 50, 8, 16, line_space=1)
    assert screen.max_lines == 3


def test_line_shown_at_bottom(device, screen):
    device.write("hello\r\n")
    assert device.lines[-1] == "hello"
    assert screen.rows[device.max_lines - 1] == "hello"
    assert screen.aligns[device.max_lines - 1] is Align.LEFT


def test_pending_text_not_shown_until_line_end(device, screen):
    device.write("part")
    assert device.pending == "part"
    assert "part" not in device.lines
    device.write("\n")
    assert device.lines[-1] == "part"
    assert device.pending == ""


def test_long_line_is_cut(device):
    device.write("x" * 50 + "\n")
    assert device.lines[-1] == "x" * device.max_chars


def test_lines_scroll_up(device):
    device.write("a\nb\nc\nd\n")
    assert device.lines == ("b", "c", "d")


def test_crlf_ends_one_line_and_cr_alone_ends_line(device):
    device.write("a\r\nb\r\n")
    assert device.lines == ("", "a", "b")
    device.write("c\rd\n")
    assert device.lines == ("b", "c", "d")


def test_screen_redrawn_for_each_line(device, screen):
    device.write("one\ntwo\n")
    assert screen.clear_count == 2
    assert [screen.rows[i] for i in range(device.max_lines)] == list(device.lines)


def test_feed_and_print_through_device(device):
    device.printf(1, "dispd")
    assert device.lines[-1] == "dispd"


def test_read_returns_nothing(device):
    assert device.read(10, 0) == ""


def test_close_clears_lines(device):
    device.write("x\ny")
    device.close()
    assert device.lines == ("",) * device.max_lines
    assert device.pending == ""


def test_invalid_screen_geometry():
    with pytest.raises(ValueError):
        MemoryScreen(0, 48, 8, 16)
    with pytest.raises(ValueError):
        DisplayDevice(MemoryScreen(4, 48, 8, 16))


def test_text_out_off_screen_rejected(screen):
    with pytest.raises(ValueError):
        screen.text_out(screen.max_lines, "x")


def test_text_out_records_centred_alignment(screen):
    screen.text_out(0, "T", Align.MID)
    assert screen.rows[0] == "T"
    assert screen.aligns[0] == Align.MID
    assert screen.aligns[0] == 0x1000