"""
Wire format of the mute button.

Input reports are 8 bytes; byte 4 carries the touch sensor state:

    0 -> idle, 1 -> touch down, 2 -> touch up

Any other value is ignored. Output reports are 2 bytes, a zero report ID
followed by the command byte ``color code + mode code``.
"""

import logging
from enum import Enum

from mutebutton.models import ButtonColor, ButtonMode

logger = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

REPORT_LENGTH = 8
TOUCH_BYTE_INDEX = 4
REPORT_ID = 0x00


class TouchEvent(Enum):
    """Touch sensor event decoded from one input report."""

    IDLE = 0
    TOUCHED = 1
    UNTOUCHED = 2
    UNKNOWN = -1


def decode_report(report: bytes) -> TouchEvent:
    """Decode an input report into a touch event.

    Short reports and unrecognized sensor values decode to UNKNOWN and are
    logged at TRACE level.
    """
    if len(report) <= TOUCH_BYTE_INDEX:
        logger.log(TRACE, f"Short report from device: {report.hex()}")
        return TouchEvent.UNKNOWN

    value = report[TOUCH_BYTE_INDEX]
    try:
        return TouchEvent(value)
    except ValueError:
        logger.log(TRACE, f"Unknown value from device: {value}")
        return TouchEvent.UNKNOWN


def command_byte(color: ButtonColor, mode: ButtonMode = ButtonMode.FULL_BRIGHT) -> int:
    """Combine color and mode into the device command byte."""
    return color.code + mode.code


def encode_command(color: ButtonColor, mode: ButtonMode = ButtonMode.FULL_BRIGHT) -> bytes:
    """Build the 2-byte output report that sets the LED."""
    return bytes([REPORT_ID, command_byte(color, mode)])
