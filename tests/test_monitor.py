import io

import pytest

from hidreport.display import Circle, Rect, hex_dump
from hidreport.monitor import (
    HidMonitor,
    InterfaceEvent,
    Protocol,
    Screen,
    SubClass,
)
from hidreport.reports import KeyState


@pytest.fixture
def monitor():
    return HidMonitor(Screen(), io.StringIO())


def test_screen_records_and_clears():
    screen = Screen()
    screen.draw_text(1, 2, "hi")
    screen.draw_shape(Rect(0, 0, 0, 1, 1))
    assert screen.texts == [(1, 2, "hi")]
    assert len(screen.shapes) == 1
    screen.clear()
    assert screen.texts == []
    assert screen.shapes == []


def test_header_printed_once_per_protocol(monitor):
    monitor.header(Protocol.MOUSE)
    monitor.header(Protocol.MOUSE)
    assert monitor.out.getvalue() == "\r\nMouse\r\n"
    monitor.header(Protocol.KEYBOARD)
    assert monitor.out.getvalue().endswith("\r\nKeyboard\r\n")
    monitor.header(Protocol.NONE)
    assert monitor.out.getvalue().endswith("\r\nGeneric\r\n")


def test_keyboard_press_prints_char(monitor):
    data = bytes([0, 0, 4, 0, 0, 0, 0, 0])
    events = monitor.handle_keyboard(data)
    assert [(e.state, e.key_code) for e in events] == [(KeyState.PRESSED, 4)]
    assert monitor.out.getvalue() == "\r\nKeyboard\r\na"
    assert (10, 180, hex_dump(data)) in monitor.screen.texts
    assert (10, 10, "04 ") in monitor.screen.texts


def test_keyboard_shift_and_release(monitor):
    monitor.handle_keyboard(bytes([0x02, 0, 4, 0, 0, 0, 0, 0]))
    events = monitor.handle_keyboard(bytes(8))
    assert [e.state for e in events] == [KeyState.RELEASED]
    assert monitor.out.getvalue().endswith("A")


def test_keyboard_enter_adds_line_feed(monitor):
    monitor.handle_keyboard(bytes([0, 0, 0x28, 0, 0, 0, 0, 0]))
    assert monitor.out.getvalue().endswith("\r\n")


def test_keyboard_short_report_ignored(monitor):
    assert monitor.handle_keyboard(bytes([0, 0, 4])) == []
    assert monitor.out.getvalue() == ""
    assert monitor.screen.texts == []


def test_mouse_report_accumulates(monitor):
    report = monitor.handle_mouse(bytes([1, 5, 0xFB]))
    assert report.x_displacement == 5
    assert report.y_displacement == -5
    monitor.handle_mouse(bytes([0, 5, 0]))
    assert monitor.mouse.x_pos == 10
    assert monitor.mouse.y_pos == -5
    drawn = [t for x, y, t in monitor.screen.texts if (x, y) == (0, 18)]
    assert len(drawn) == 1
    assert monitor.out.getvalue().endswith(drawn[0] + "\n")
    assert monitor.out.getvalue().count("Mouse\r\n") == 1


def test_mouse_too_short(monitor):
    assert monitor.handle_mouse(bytes([1, 2])) is None
    assert monitor.out.getvalue() == ""


def test_generic_gamepad(monitor):
    data = bytes([3, 0x08, 0x00, 0x40, 0x80, 0x80, 0x80, 0x80, 0, 0])
    report = monitor.handle_generic(data)
    assert report.report_id == 3
    assert report.buttons.a
    assert len(monitor.screen.shapes) == 6
    assert sum(isinstance(s, Circle) for s in monitor.screen.shapes) == 4
    out = monitor.out.getvalue()
    assert out.startswith("\r\nGeneric\r\n")
    assert "Buttons: A\n" in out
    assert [(x, y) for x, y, _ in monitor.screen.texts] == [
        (10, 180),
        (10, 10),
        (10, 26),
        (10, 42),
    ]


def test_generic_too_short(monitor):
    assert monitor.handle_generic(bytes([1, 2, 3])) is None
    assert monitor.out.getvalue().endswith("Received too-short report (3 bytes)\n")
    assert monitor.screen.texts == [(10, 180, "01 02 03")]


def test_handle_report_routing(monitor):
    events = monitor.handle_report(
        SubClass.BOOT_INTERFACE, Protocol.KEYBOARD, bytes([0, 0, 5, 0, 0, 0, 0, 0])
    )
    assert events[0].key_code == 5
    assert monitor.handle_report(SubClass.BOOT_INTERFACE, Protocol.NONE, bytes(10)) is None
    report = monitor.handle_report(SubClass.NO_SUBCLASS, Protocol.NONE, bytes(10))
    assert report.report_id == 0


def test_connected_message(monitor):
    text = monitor.handle_connected(Protocol.MOUSE)
    assert text == "HID Device, protocol 'MOUSE' CONNECTED"
    assert monitor.screen.texts == [(0, 18, text)]


@pytest.mark.parametrize(
    "event, suffix",
    [
        (InterfaceEvent.DISCONNECTED, "DISCONNECTED"),
        (InterfaceEvent.TRANSFER_ERROR, "TRANSFER_ERROR"),
        (99, "Unhandled event"),
    ],
)
def test_interface_events(monitor, event, suffix):
    text = monitor.handle_interface_event(event, Protocol.NONE)
    assert text == f"HID Device, protocol 'UNKNOWN' {suffix}"
    assert monitor.screen.texts == [(0, 18, text)]


def test_input_report_event_rejected(monitor):
    with pytest.raises(ValueError):
        monitor.handle_interface_event(InterfaceEvent.INPUT_REPORT, Protocol.MOUSE)


def test_unknown_protocol_rejected(monitor):
    with pytest.raises(ValueError):
        monitor.handle_connected(7)