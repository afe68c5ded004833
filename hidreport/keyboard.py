"""Boot-protocol keyboard report tracking and key code to character mapping."""

from __future__ import annotations

from .reports import (
    KEYBOARD_ENTER_MAIN_CHAR,
    KeyEvent,
    KeyState,
    is_shift_modifier,
)

HID_KEY_ERROR_UNDEFINED = 0x03
HID_KEY_A = 0x04
HID_KEY_SLASH = 0x38
HID_KEYBOARD_KEY_MAX = 6
BOOT_REPORT_LENGTH = 2 + HID_KEYBOARD_KEY_MAX

_ENTER = KEYBOARD_ENTER_MAIN_CHAR

# (unshifted, shifted) characters indexed by HID key code; "" means no character.
_KEYCODE_CHARS: tuple[tuple[str, str], ...] = (
    ("", ""),  # no press
    ("", ""),  # rollover
    ("", ""),  # post fail
    ("", ""),  # error undefined
    *((chr(c), chr(c).upper()) for c in range(ord("a"), ord("z") + 1)),
    ("1", "!"),
    ("2", "@"),
    ("3", "#"),
    ("4", "$"),
    ("5", "%"),
    ("6", "^"),
    ("7", "&"),
    ("8", "*"),
    ("9", "("),
    ("0", ")"),
    (_ENTER, _ENTER),  # enter
    ("", ""),  # escape
    ("\b", ""),  # delete (backspace)
    ("", ""),  # tab
    (" ", " "),
    ("-", "_"),
    ("=", "+"),
    ("[", "{"),
    ("]", "}"),
    ("\\", "|"),
    ("\\", "|"),  # non-US hash key behaves as backslash
    (";", ":"),
    ("'", '"'),
    ("`", "~"),
    (",", "<"),
    (".", ">"),
    ("/", "?"),
)


def keycode_to_char(modifier: int, key_code: int) -> str | None:
    """Return the character for a key code, or None if it produces none."""
    if not HID_KEY_A <= key_code <= HID_KEY_SLASH:
        return None
    char = _KEYCODE_CHARS[key_code][1 if is_shift_modifier(modifier) else 0]
    return char or None


def _keys(data: bytes) -> bytes:
    return bytes(data)[2:BOOT_REPORT_LENGTH]


class KeyboardTracker:
    """Turns successive boot keyboard reports into press and release events."""

    def __init__(self) -> None:
        self._prev_keys = bytes(HID_KEYBOARD_KEY_MAX)

    def feed(self, data: bytes) -> list[KeyEvent]:
        """Compare a report with the previous one and return the key transitions.

        Reports shorter than a boot keyboard report are ignored.
        """
        raw = bytes(data)
        if len(raw) < BOOT_REPORT_LENGTH:
            return []
        modifier = raw[0]
        keys = _keys(raw)
        events: list[KeyEvent] = []
        for prev, cur in zip(self._prev_keys, keys):
            if prev > HID_KEY_ERROR_UNDEFINED and prev not in keys:
                events.append(KeyEvent(KeyState.RELEASED, 0, prev))
            if cur > HID_KEY_ERROR_UNDEFINED and cur not in self._prev_keys:
                events.append(KeyEvent(KeyState.PRESSED, modifier, cur))
        self._prev_keys = keys
        return events

    def pressed_keys_text(self, data: bytes) -> str:
        """Hex codes of the keys held in a report, each followed by a space."""
        return "".join(
            f"{key:02X} " for key in _keys(data) if key > HID_KEY_ERROR_UNDEFINED
        )