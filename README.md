# hidreport

Turn raw USB HID input reports into structured Python values and readable
text. It covers boot-protocol keyboards, mice (boot, 5-byte, 12-bit and
16-bit extended reports) and generic gamepad reports of ten bytes or more.
It has no dependencies beyond the standard library.

## Installation

```
pip install hidreport
```

## Parsing reports

```python
from hidreport.reports import parse_mouse_event, parse_gamepad_report

mouse = parse_mouse_event(bytes([0x01, 0x05, 0xFB, 0x01, 0x00]))
print(mouse.x_displacement, mouse.y_displacement, mouse.scroll)  # 5 -5 1

pad = parse_gamepad_report(bytes([0x03, 0x08, 0x00, 0x40, 0x80, 0x80, 0x80, 0x80, 0x00, 0x00]))
print(pad.buttons.pressed())  # ('A',)
```

`parse_mouse_event` picks the layout from the report length and returns a
frozen `MouseReport` with `MouseButtons`, X/Y displacement, scroll and tilt.
`parse_gamepad_report` returns a `GamepadReport` with `GamepadButtons`
(including the d-pad decoded from the hat byte) and the stick and trigger
axes; data shorter than ten bytes gives an empty report.
`sign_extend_12bit` and `is_shift_modifier` are also available, as are the
`KeyState` enum and the `KeyEvent` dataclass.

## Keyboards

`hidreport.keyboard.KeyboardTracker` keeps the previous boot report.
`feed(data)` returns the press and release `KeyEvent`s caused by a new report
(reports shorter than eight bytes are ignored), and
`pressed_keys_text(data)` gives the hex codes of the keys held in it.
`keycode_to_char(modifier, key_code)` maps a key code and modifier byte to
the US-layout character, or `None` for keys that have none.

## Display helpers

`hidreport.display` formats reports for a screen or a terminal: `hex_dump`,
`MouseTracker` for accumulated position, scroll and tilt with its
`status_line`, `gamepad_button_line`, `gamepad_info_lines`, and
`gamepad_visual`, which describes thumbsticks and triggers as `Circle` and
`Rect` shapes.

## Monitoring devices

`hidreport.monitor.HidMonitor` ties it together. `handle_report(sub_class,
protocol, data)` routes a report, by its `SubClass` and `Protocol`, to
`handle_keyboard`, `handle_mouse` or `handle_generic`; each draws onto a
`Screen` and writes text to an output stream (standard output by default).
`handle_connected` and `handle_interface_event` (for `InterfaceEvent`
disconnects, transfer errors and unknown events) produce the matching status
lines and log them.

## What it does not do

The package does not talk to USB hardware: it does not enumerate, open or
read from devices, so the caller must supply the report bytes and the
interface subclass and protocol. `Screen` only records the text and shapes
drawn on it; nothing is rendered to pixels or shown on a display. There is no
command-line program.