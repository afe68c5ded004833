"""Parsing and presentation of USB HID keyboard, mouse and gamepad input reports."""

__version__ = "0.1.0"
__all__ = ["reports", "keyboard", "display", "monitor"]