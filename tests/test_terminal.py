import curses

from record_tui.terminal import fit, safe_addstr, sanitize, truncate


class FakeWindow:
    def __init__(self, height: int, width: int, fail: bool = False) -> None:
        self.size = (height, width)
        self.fail = fail
        self.writes = []

    def getmaxyx(self):
        return self.size

    def addstr(self, y, x, text, attr=0):
        if self.fail:
            raise curses.error("addstr")
        self.writes.append((y, x, text))


def test_sanitize_strips_escape_sequences() -> None:
    assert sanitize("\x1b[31mRed\x1b[0m\nline\x07") == "Red line"


def test_truncate() -> None:
    assert truncate("Record Deep", 20) == "Record Deep"
    assert truncate("Record Deep", 8) == "Recor..."
    assert truncate("Record", 2) == "Re"
    assert truncate("Record", 0) == ""


def test_fit_pads_to_width() -> None:
    assert fit("Dub", 5) == "Dub  "
    assert fit("Dubstep", 0) == ""


def test_safe_addstr_clips_to_window() -> None:
    window = FakeWindow(10, 8)

    end = safe_addstr(window, 0, 3, "Trancemission")

    assert window.writes == [(0, 3, "Tranc")]
    assert end == 8


def test_safe_addstr_avoids_bottom_right_cell() -> None:
    window = FakeWindow(4, 6)

    safe_addstr(window, 3, 0, "abcdefgh")

    assert window.writes == [(3, 0, "abcde")]


def test_safe_addstr_outside_window_is_noop() -> None:
    window = FakeWindow(4, 6)

    assert safe_addstr(window, 9, 2, "x") == 2
    assert window.writes == []


def test_safe_addstr_swallows_curses_errors() -> None:
    assert safe_addstr(FakeWindow(4, 6, fail=True), 0, 0, "ok", max_width=1) == 1
