"""Mute button hardware access: discovery, HID handle, wire protocol and LED output."""

from .color_controller import ColorController
from .handle import HidDeviceHandle
from .locator import DeviceLocator
from .protocol import REPORT_LENGTH, TRACE, TouchEvent, command_byte, decode_report, encode_command

__all__ = [
    "REPORT_LENGTH",
    "TRACE",
    "ColorController",
    "DeviceLocator",
    "HidDeviceHandle",
    "TouchEvent",
    "command_byte",
    "decode_report",
    "encode_command",
]
