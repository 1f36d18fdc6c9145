import io

from dbgkit.demo import build_menu, main
from dbgkit.wind import StreamDevice


def make_device():
    out = io.StringIO()
    return StreamDevice(output=out, input=io.StringIO("")), out


def test_build_menu_structure():
    device, _ = make_device()
    menu = build_menu(device)
    assert menu.title == "SmartCard接口"
    assert [item.text for item in menu.items] == [
        "open接口",
        "CheckIn接口",
        "Reset接口",
        "Comm接口",
        "Close接口",
    ]
    assert all(item.action is not None for item in menu.items)


def test_actions_report_their_names():
    device, out = make_device()
    menu = build_menu(device)
    for number, expected in enumerate(["open", "check in", "reset", "comm", "close"], 1):
        out.truncate(0)
        out.seek(0)
        menu.items[number - 1].action(number)
        assert out.getvalue().endswith(expected + "\r\n")


def test_main_runs_selected_item(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO("1\ne"))
    monkeypatch.setattr("sys.stdout", out)
    assert main([]) == 0
    text = out.getvalue()
    assert "\tSmartCard接口" in text
    assert "open\r\n" in text


def test_main_ends_on_eof(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    monkeypatch.setattr("sys.stdout", out)
    assert main([]) == 0
    assert "please input: " in out.getvalue()