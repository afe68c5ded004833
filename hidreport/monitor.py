"""Dispatches HID host events and reports to text output and a drawing surface."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TextIO

from .display import (
    Circle,
    Rect,
    MouseTracker,
    gamepad_button_line,
    gamepad_info_lines,
    gamepad_visual,
    hex_dump,
)
from .keyboard import BOOT_REPORT_LENGTH, KeyboardTracker, keycode_to_char
from .reports import (
    GAMEPAD_REPORT_MIN_LENGTH,
    KEYBOARD_ENTER_LF_EXTEND,
    KEYBOARD_ENTER_MAIN_CHAR,
    GamepadReport,
    KeyEvent,
    KeyState,
    MouseReport,
    parse_gamepad_report,
    parse_mouse_event,
)

logger = logging.getLogger(__name__)

MAX_REPORT_LENGTH = 64
MOUSE_BOOT_REPORT_LENGTH = 3
_TEXT_LIMIT = 63


class Protocol(IntEnum):
    """HID interface protocol."""

    NONE = 0
    KEYBOARD = 1
    MOUSE = 2

    @property
    def label(self) -> str:
        """Upper-case display name of the protocol."""
        return "UNKNOWN" if self is Protocol.NONE else self.name


class SubClass(IntEnum):
    """HID interface subclass."""

    NO_SUBCLASS = 0
    BOOT_INTERFACE = 1


class InterfaceEvent(IntEnum):
    """Events raised by an open HID interface."""

    INPUT_REPORT = 0
    TRANSFER_ERROR = 1
    DISCONNECTED = 2


@dataclass
class Screen:
    """A drawing surface that records the text and shapes put on it."""

    texts: list[tuple[int, int, str]] = field(default_factory=list)
    shapes: list[Circle | Rect] = field(default_factory=list)

    def clear(self) -> None:
        """Wipe everything drawn so far."""
        self.texts.clear()
        self.shapes.clear()

    def draw_text(self, x: int, y: int, text: str) -> None:
        """Place a line of text with its top-left corner at (x, y)."""
        self.texts.append((x, y, text))

    def draw_shape(self, shape: Circle | Rect) -> None:
        """Draw a filled shape."""
        self.shapes.append(shape)


class HidMonitor:
    """Shows what connected HID devices send, on a screen and a text stream."""

    def __init__(self, screen: Screen | None = None, out: TextIO | None = None) -> None:
        self.screen = screen if screen is not None else Screen()
        self.out = out if out is not None else sys.stdout
        self.keyboard = KeyboardTracker()
        self.mouse = MouseTracker()
        self._last_protocol: Protocol | None = None

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def _show_raw(self, data: bytes) -> None:
        self.screen.clear()
        self.screen.draw_text(10, 180, hex_dump(data))

    def _status(self, message: str) -> str:
        text = message[:_TEXT_LIMIT]
        self.screen.clear()
        self.screen.draw_text(0, 18, text)
        return text

    def header(self, protocol: Protocol | int) -> None:
        """Print a device-type heading when the reporting protocol changes."""
        protocol = Protocol(protocol)
        if protocol == self._last_protocol:
            return
        self._last_protocol = protocol
        if protocol is Protocol.MOUSE:
            name = "Mouse"
        elif protocol is Protocol.KEYBOARD:
            name = "Keyboard"
        else:
            name = "Generic"
        self._write(f"\r\n{name}\r\n")

    def handle_report(
        self, sub_class: SubClass | int, protocol: Protocol | int, data: bytes
    ) -> list[KeyEvent] | MouseReport | GamepadReport | None:
        """Route an input report to the handler for its interface type."""
        data = bytes(data)[:MAX_REPORT_LENGTH]
        protocol = Protocol(protocol)
        if SubClass(sub_class) is SubClass.BOOT_INTERFACE:
            if protocol is Protocol.KEYBOARD:
                return self.handle_keyboard(data)
            if protocol is Protocol.MOUSE:
                return self.handle_mouse(data)
            return None
        return self.handle_generic(data)

    def _key_event(self, event: KeyEvent) -> None:
        self.header(Protocol.KEYBOARD)
        if event.state is not KeyState.PRESSED:
            return
        char = keycode_to_char(event.modifier, event.key_code)
        if char is None:
            return
        if KEYBOARD_ENTER_LF_EXTEND and char == KEYBOARD_ENTER_MAIN_CHAR:
            char += "\n"
        self._write(char)

    def handle_keyboard(self, data: bytes) -> list[KeyEvent]:
        """Handle a boot keyboard report; returns the key transitions it caused."""
        data = bytes(data)
        if len(data) < BOOT_REPORT_LENGTH:
            return []
        self._show_raw(data)
        text = self.keyboard.pressed_keys_text(data)
        events = self.keyboard.feed(data)
        for event in events:
            self._key_event(event)
        self.screen.draw_text(10, 10, text)
        return events

    def handle_mouse(self, data: bytes) -> MouseReport | None:
        """Handle a mouse report; returns the parsed report, or None if too short."""
        data = bytes(data)
        if len(data) < MOUSE_BOOT_REPORT_LENGTH:
            return None
        self._show_raw(data)
        report = parse_mouse_event(data)
        self.mouse.update(report)
        self.header(Protocol.MOUSE)
        text = self.mouse.status_line(report)
        self.screen.draw_text(0, 18, text)
        self._write(f"{text}\n")
        return report

    def handle_generic(self, data: bytes) -> GamepadReport | None:
        """Handle a non-boot report as a gamepad; None if it is too short."""
        data = bytes(data)
        self.header(Protocol.NONE)
        self._show_raw(data)
        if len(data) < GAMEPAD_REPORT_MIN_LENGTH:
            self._write(f"Received too-short report ({len(data)} bytes)\n")
            return None
        report = parse_gamepad_report(data)
        for shape in gamepad_visual(report):
            self.screen.draw_shape(shape)
        button_line = gamepad_button_line(report)
        line1, line2 = gamepad_info_lines(report, len(data))
        self._write(f"{button_line}\n{line1}\n{line2}\n")
        self.screen.draw_text(10, 10, button_line)
        self.screen.draw_text(10, 26, line1)
        self.screen.draw_text(10, 42, line2)
        return report

    def handle_connected(self, protocol: Protocol | int) -> str:
        """Announce a newly connected device; returns the message shown."""
        protocol = Protocol(protocol)
        message = f"HID Device, protocol '{protocol.label}' CONNECTED"
        logger.info(message)
        return self._status(message)

    def handle_interface_event(
        self, event: InterfaceEvent | int, protocol: Protocol | int
    ) -> str:
        """Announce a disconnect, transfer error or unknown interface event.

        Input reports carry data and go through handle_report instead.
        """
        protocol = Protocol(protocol)
        try:
            event = InterfaceEvent(event)
        except ValueError:
            pass
        if event == InterfaceEvent.INPUT_REPORT:
            raise ValueError("input reports must be passed to handle_report")
        if event == InterfaceEvent.DISCONNECTED:
            message = f"HID Device, protocol '{protocol.label}' DISCONNECTED"
            logger.info(message)
        elif event == InterfaceEvent.TRANSFER_ERROR:
            message = f"HID Device, protocol '{protocol.label}' TRANSFER_ERROR"
            logger.info(message)
        else:
            message = f"HID Device, protocol '{protocol.label}' Unhandled event"
            logger.error(message)
        return self._status(message)