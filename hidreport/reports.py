"""Parsing of raw USB HID input reports from mice, gamepads and keyboards."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import IntEnum

HID_LEFT_CONTROL = 0x01
HID_LEFT_SHIFT = 0x02
HID_LEFT_ALT = 0x04
HID_LEFT_GUI = 0x08
HID_RIGHT_CONTROL = 0x10
HID_RIGHT_SHIFT = 0x20
HID_RIGHT_ALT = 0x40
HID_RIGHT_GUI = 0x80

KEYBOARD_ENTER_MAIN_CHAR = "\r"
"""Character produced by the Enter key."""

KEYBOARD_ENTER_LF_EXTEND = True
"""Whether Enter is followed by a line feed when echoed."""

GAMEPAD_REPORT_MIN_LENGTH = 10

_HAT_UP = frozenset({0x00, 0x01, 0x07})
_HAT_RIGHT = frozenset({0x01, 0x02, 0x03})
_HAT_DOWN = frozenset({0x03, 0x04, 0x05})
_HAT_LEFT = frozenset({0x05, 0x06, 0x07})

# Display labels in the order they are listed when showing pressed buttons.
_BUTTON_LABELS = (
    ("A", "a"),
    ("B", "b"),
    ("X", "x"),
    ("Y", "y"),
    ("L1", "l1"),
    ("R1", "r1"),
    ("L2", "l2"),
    ("R2", "r2"),
    ("L3", "l3"),
    ("R3", "r3"),
    ("L4", "l4"),
    ("R4", "r4"),
    ("Select", "select"),
    ("Start", "start"),
    ("Home", "home"),
    ("Left", "left"),
    ("Right", "right"),
    ("Up", "up"),
    ("Down", "down"),
)


def _int8(byte: int) -> int:
    return byte - 0x100 if byte & 0x80 else byte


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def sign_extend_12bit(value: int) -> int:
    """Interpret the low 12 bits of a 16-bit value as a signed number."""
    value &= 0xFFFF
    if value & 0x800:
        return _int16(value | 0xF000)
    return value & 0x0FFF


@dataclass(frozen=True)
class MouseButtons:
    """Mouse button state as packed in the first button byte."""

    button1: bool = False
    button2: bool = False
    button3: bool = False
    reserved: int = 0

    @classmethod
    def from_byte(cls, value: int) -> MouseButtons:
        """Unpack a button byte."""
        value &= 0xFF
        return cls(
            button1=bool(value & 0x01),
            button2=bool(value & 0x02),
            button3=bool(value & 0x04),
            reserved=value >> 3,
        )

    @property
    def value(self) -> int:
        """The packed button byte."""
        return (
            int(self.button1)
            | int(self.button2) << 1
            | int(self.button3) << 2
            | (self.reserved & 0x1F) << 3
        )


@dataclass(frozen=True)
class MouseReport:
    """Relative movement, wheel and button state from one mouse report."""

    buttons: MouseButtons = field(default_factory=MouseButtons)
    x_displacement: int = 0
    y_displacement: int = 0
    scroll: int = 0
    tilt: int = 0


@dataclass(frozen=True)
class GamepadButtons:
    """Digital button state of a gamepad, including the d-pad directions."""

    a: bool = False
    b: bool = False
    x: bool = False
    y: bool = False
    select: bool = False
    start: bool = False
    l1: bool = False
    r1: bool = False
    l2: bool = False
    r2: bool = False
    l3: bool = False
    r3: bool = False
    home: bool = False
    l4: bool = False
    r4: bool = False
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_value(cls, value: int) -> GamepadButtons:
        """Unpack a bit field where each button takes one bit, ``a`` lowest."""
        return cls(
            **{f.name: bool(value >> bit & 1) for bit, f in enumerate(fields(cls))}
        )

    @property
    def value(self) -> int:
        """The buttons packed as a bit field, ``a`` in the lowest bit."""
        return sum(
            1 << bit for bit, f in enumerate(fields(self)) if getattr(self, f.name)
        )

    def pressed(self) -> tuple[str, ...]:
        """Labels of the pressed buttons, in display order."""
        return tuple(label for label, name in _BUTTON_LABELS if getattr(self, name))


@dataclass(frozen=True)
class GamepadReport:
    """Buttons and analog axes from one gamepad report."""

    report_id: int = 0
    buttons: GamepadButtons = field(default_factory=GamepadButtons)
    lx: int = 0
    ly: int = 0
    rx: int = 0
    ry: int = 0
    lt: int = 0
    rt: int = 0


class KeyState(IntEnum):
    """Whether a key went down or came up."""

    PRESSED = 0x00
    RELEASED = 0x01


@dataclass(frozen=True)
class KeyEvent:
    """A single key transition with the modifiers active at the time."""

    state: KeyState
    modifier: int
    key_code: int


def parse_mouse_event(data: bytes) -> MouseReport:
    """Parse a mouse input report.

    The layout is chosen by report length: up to 4 bytes is the boot
    protocol, 5 bytes carries wheel and tilt, 6 to 8 bytes packs X and Y as
    12-bit values, and 9 bytes or more uses 16-bit X and Y. Bytes missing
    from a short report read as zero.
    """
    raw = bytes(data)
    length = len(raw)
    d = raw.ljust(9, b"\0")

    if length <= 4:
        return MouseReport(
            buttons=MouseButtons.from_byte(d[0]),
            x_displacement=_int8(d[1]),
            y_displacement=_int8(d[2]),
        )
    if length == 5:
        return MouseReport(
            buttons=MouseButtons.from_byte(d[0]),
            x_displacement=_int8(d[1]),
            y_displacement=_int8(d[2]),
            scroll=_int8(d[3]),
            tilt=_int8(d[4]),
        )
    if length < 9:
        return MouseReport(
            buttons=MouseButtons.from_byte(d[1]),
            x_displacement=_int16(sign_extend_12bit((d[4] & 0x0F) << 8) | d[3]),
            y_displacement=_int16(sign_extend_12bit(d[5] << 4) | (d[4] >> 4)),
            scroll=_int8(d[6]),
            tilt=_int8(d[7]) if length == 8 else 0,
        )
    return MouseReport(
        buttons=MouseButtons.from_byte(d[1]),
        x_displacement=_int16(d[4] << 8 | d[3]),
        y_displacement=_int16(d[6] << 8 | d[5]),
        scroll=_int8(d[7]),
        tilt=_int8(d[8]),
    )


def parse_gamepad_report(data: bytes) -> GamepadReport:
    """Parse a gamepad report; reports shorter than 10 bytes give an empty report."""
    d = bytes(data)
    if len(d) < GAMEPAD_REPORT_MIN_LENGTH:
        return GamepadReport()

    hat, b1, b2 = d[1], d[2], d[3]

    def bit(byte: int, n: int) -> bool:
        return bool(byte >> n & 1)

    buttons = GamepadButtons(
        up=hat in _HAT_UP,
        right=hat in _HAT_RIGHT,
        down=hat in _HAT_DOWN,
        left=hat in _HAT_LEFT,
        a=bit(b2, 6),
        b=bit(b2, 5),
        x=bit(b2, 4),
        y=bit(b2, 3),
        l1=bit(b2, 0),
        r1=bit(b1, 7),
        l2=bit(b2, 2),
        r2=bit(b2, 1),
        l3=bit(b1, 2),
        r3=bit(b1, 3),
        l4=bit(b1, 1),
        r4=bit(b1, 0),
        select=bit(b1, 6),
        start=bit(b1, 5),
        home=bit(b1, 4),
    )
    return GamepadReport(
        report_id=d[0],
        buttons=buttons,
        lx=d[4],
        ly=d[5],
        rx=d[6],
        ry=d[7],
        lt=d[8],
        rt=d[9],
    )


def is_shift_modifier(modifier: int) -> bool:
    """True when either shift key is held in a keyboard modifier byte."""
    return bool(modifier & HID_LEFT_SHIFT) or bool(modifier & HID_RIGHT_SHIFT)