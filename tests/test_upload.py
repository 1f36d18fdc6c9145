import io

import pytest

from dbgkit.filed import FileDevice
from dbgkit.printd import DebugDevice
from dbgkit.upload import upload


class _RecordingDevice(DebugDevice):
    def __init__(self, data):
        super().__init__()
        self.data = data
        self.offsets = []

    def read(self, size, offset=0):
        self.offsets.append(offset)
        return self.data[offset : offset + size]


@pytest.mark.parametrize("length", [0, 1, 127, 128, 300, 512])
def test_upload_copies_everything(tmp_path, length):
    data = bytes(i % 251 for i in range(length))
    with FileDevice(tmp_path / "log.txt", 4096) as dev:
        if data:
            dev.write(data)
        stream = io.BytesIO()
        assert upload(dev, stream) == length
    assert stream.getvalue() == data


def test_reads_follow_chunks():
    chunk = 16
    dev = _RecordingDevice(b"z" * (chunk * 2))
    stream = io.BytesIO()
    assert upload(dev, stream, chunk) == chunk * 2
    assert dev.offsets == [0, chunk, chunk * 2]


def test_short_chunk_ends_upload():
    dev = _RecordingDevice(b"abcdefg")
    stream = io.BytesIO()
    assert upload(dev, stream, 4) == 7
    assert stream.getvalue() == b"abcdefg"
    assert len(dev.offsets) == 2


def test_text_device_is_encoded():
    dev = _RecordingDevice("log line\r\n")
    stream = io.BytesIO()
    upload(dev, stream, 4)
    assert stream.getvalue() == b"log line\r\n"


def test_stream_left_open():
    stream = io.BytesIO()
    upload(_RecordingDevice(b"abc"), stream)
    assert not stream.closed


def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        upload(_RecordingDevice(b""), io.BytesIO(), 0)