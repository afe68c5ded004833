"""Text and shape rendering for mouse and gamepad reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .reports import GamepadReport, MouseReport

_TEXT_LIMIT = 63

_CENTER_Y = 120
_LEFT_STICK_X = 130
_RIGHT_STICK_X = 230
_STICK_RADIUS = 12
_DOT_RADIUS = 3
_LT_X = 170
_RT_X = 190
_BAR_WIDTH = 10
_BAR_MAX_HEIGHT = 40


class Color(IntEnum):
    """ARGB drawing colours."""

    BLACK = 0xFF000000
    WHITE = 0xFFFFFFFF
    RED = 0xFFFF0000


@dataclass(frozen=True)
class Circle:
    """A filled circle centred on (x, y)."""

    color: Color
    x: int
    y: int
    radius: int


@dataclass(frozen=True)
class Rect:
    """A filled rectangle with its top-left corner at (x, y)."""

    color: Color
    x: int
    y: int
    width: int
    height: int


def hex_dump(data: bytes) -> str:
    """Bytes as upper-case hex pairs separated by spaces."""
    return " ".join(f"{b:02X}" for b in bytes(data))


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class MouseTracker:
    """Accumulates relative mouse movement into absolute position and scroll."""

    def __init__(self) -> None:
        self.x_pos = 0
        self.y_pos = 0
        self.x_scroll = 0
        self.y_scroll = 0

    def update(self, report: MouseReport) -> None:
        """Add one report's displacement, wheel and tilt."""
        self.x_pos += report.x_displacement
        self.y_pos += report.y_displacement
        self.x_scroll += report.scroll
        self.y_scroll += report.tilt

    def status_line(self, report: MouseReport) -> str:
        """Position, button and scroll summary using the report's buttons."""
        b = report.buttons
        marks = "|".join(
            "o" if pressed else " " for pressed in (b.button1, b.button3, b.button2)
        )
        text = (
            f"Mouse X: {self.x_pos:06d}\tY: {self.y_pos:06d}\t"
            f"|{marks}| "
            f"Scroll: {self.x_scroll:03d} Tilt: {self.y_scroll:03d}"
        )
        return text[:_TEXT_LIMIT]


def gamepad_button_line(report: GamepadReport) -> str:
    """'Buttons:' followed by the labels of the pressed buttons."""
    return "".join(["Buttons:", *(f" {label}" for label in report.buttons.pressed())])


def gamepad_info_lines(report: GamepadReport, length: int) -> tuple[str, str]:
    """Report id and length line, and the analog axes line."""
    line1 = f"Report ID: 0x{report.report_id:02X} | Length: {length:2d}"
    line2 = (
        f"Axes: LX={report.lx:3d} LY={report.ly:3d} RX={report.rx:3d} "
        f"RY={report.ry:3d} LT={report.lt:3d} RT={report.rt:3d}"
    )
    return line1[:_TEXT_LIMIT], line2[:_TEXT_LIMIT]


def gamepad_visual(report: GamepadReport) -> list[Circle | Rect]:
    """Shapes showing both sticks and the two trigger bars."""

    def stick(center_x: int, ax: int, ay: int) -> list[Circle | Rect]:
        return [
            Circle(Color.RED, center_x, _CENTER_Y, _STICK_RADIUS),
            Circle(
                Color.BLACK,
                center_x + _tdiv(ax - 128, 6),
                _CENTER_Y + _tdiv(ay - 128, 6),
                _DOT_RADIUS,
            ),
        ]

    def bar(x: int, value: int) -> Rect:
        height = value * _BAR_MAX_HEIGHT // 255
        return Rect(Color.BLACK, x, _CENTER_Y - height, _BAR_WIDTH, height)

    return [
        *stick(_LEFT_STICK_X, report.lx, report.ly),
        bar(_LT_X, report.lt),
        bar(_RT_X, report.rt),
        *stick(_RIGHT_STICK_X, report.rx, report.ry),
    ]