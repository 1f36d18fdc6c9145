from dbgkit.printd import LINE_FEED, DebugDevice
from dbgkit.tickd import TickTimer, tick_count


class Recorder(DebugDevice):
    def __init__(self):
        super().__init__()
        self.chunks = []

    def write(self, data):
        self.chunks.append(data)
        return len(data)

    @property
    def text(self):
        return "".join(self.chunks)


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_tick_count_in_range_and_monotonic():
    first = tick_count()
    second = tick_count()
    assert 0 <= first <= 0xFFFFFFFF
    assert (second - first) & 0xFFFFFFFF < 1000


def test_elapsed_from_construction():
    clock = FakeClock(100)
    timer = TickTimer(Recorder(), clock)
    clock.now = 130
    assert timer.elapsed() == 30


def test_step_prints_and_restarts():
    clock = FakeClock(0)
    dev = Recorder()
    timer = TickTimer(dev, clock)
    clock.now = 5
    assert timer.step() == 5
    assert dev.text == "tick: 5" + LINE_FEED
    assert timer.elapsed() == 0


def test_end_does_not_restart():
    clock = FakeClock(10)
    dev = Recorder()
    timer = TickTimer(dev, clock)
    clock.now = 17
    assert timer.end() == 7
    clock.now = 20
    assert timer.elapsed() == 10


def test_start_resets():
    clock = FakeClock(0)
    timer = TickTimer(Recorder(), clock)
    clock.now = 50
    timer.start()
    clock.now = 60
    assert timer.elapsed() == 10


def test_wrap_around():
    clock = FakeClock(0xFFFFFFF0)
    timer = TickTimer(Recorder(), clock)
    clock.now = 0x10
    assert timer.elapsed() == 32