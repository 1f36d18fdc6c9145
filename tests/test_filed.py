import pytest

from dbgkit.filed import FileDevice
from dbgkit.printd import DeviceError


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "log.txt"


def test_write_then_read_round_trip(log_path):
    with FileDevice(log_path, 1024) as dev:
        assert dev.write("hello ") == 6
        dev.write(b"world")
        assert dev.read(11, 0) == b"hello world"
        assert dev.read(5, 6) == b"world"


def test_read_past_end_is_short(log_path):
    with FileDevice(log_path, 1024) as dev:
        dev.write("abc")
        assert dev.read(10, 1) == b"bc"
        assert dev.read(10, 3) == b""


def test_overflow_starts_file_over(log_path):
    with FileDevice(log_path, 10) as dev:
        dev.write("abcdefgh")
        dev.write("xyz")
        assert log_path.read_bytes() == b"xyz"


def test_write_exactly_to_limit_keeps_content(log_path):
    with FileDevice(log_path, 10) as dev:
        dev.write("abcde")
        dev.write("fghij")
        assert log_path.read_bytes() == b"abcdefghij"


def test_existing_content_is_kept(log_path):
    log_path.write_bytes(b"old;")
    with FileDevice(log_path, 100) as dev:
        dev.write("new")
    assert log_path.read_bytes() == b"old;new"


def test_clear_empties_file(log_path):
    with FileDevice(log_path, 100) as dev:
        dev.write("something")
        dev.clear()
        assert dev.read(100, 0) == b""
    assert log_path.read_bytes() == b""


def test_printf_without_header(log_path):
    with FileDevice(log_path, 1024) as dev:
        dev.printf(1, "max size: %d", 5)
    assert log_path.read_bytes() == b"max size: 5\r\n"


def test_closed_device_raises(log_path):
    dev = FileDevice(log_path, 100)
    dev.close()
    assert dev.closed
    with pytest.raises(DeviceError):
        dev.write("x")
    with pytest.raises(DeviceError):
        dev.read(1, 0)


def test_open_failure_raises(tmp_path):
    with pytest.raises(DeviceError):
        FileDevice(tmp_path / "missing" / "log.txt", 100)


def test_invalid_arguments(log_path):
    with pytest.raises(ValueError):
        FileDevice(log_path, 0)
    with FileDevice(log_path, 10) as dev:
        with pytest.raises(ValueError):
            dev.read(1, -1)