"""Enumerations for the mute button."""

from enum import Enum

from mutebutton.exceptions import ColorParseError


class ButtonColor(str, Enum):
    """LED colors supported by the button.

    Values are the exact names accepted from the UI and from config files.
    """

    NO_COLOR = "NoColor"
    RED = "Red"
    GREEN = "Green"
    YELLOW = "Yellow"
    BLUE = "Blue"
    PURPLE = "Purple"
    CYAN = "Cyan"
    WHITE = "White"

    @property
    def code(self) -> int:
        """Device color code (low nibble of the command byte)."""
        return _COLOR_CODES[self]

    @classmethod
    def parse(cls, name: str) -> "ButtonColor":
        """
        Parse an exact color name ("Red", "NoColor", ...).

        No case folding or aliasing is applied.

        Raises:
            ColorParseError: If name is not a supported color
        """
        try:
            return cls(name)
        except ValueError:
            raise ColorParseError(name, cls.names()) from None

    @classmethod
    def names(cls) -> list[str]:
        """All accepted color names."""
        return [color.value for color in cls]


_COLOR_CODES: dict[ButtonColor, int] = {
    ButtonColor.NO_COLOR: 0x00,
    ButtonColor.RED: 0x01,
    ButtonColor.GREEN: 0x02,
    ButtonColor.YELLOW: 0x03,
    ButtonColor.BLUE: 0x04,
    ButtonColor.PURPLE: 0x05,
    ButtonColor.CYAN: 0x06,
    ButtonColor.WHITE: 0x07,
}


class ButtonMode(str, Enum):
    """LED brightness modes. Only full brightness is driven today."""

    FULL_BRIGHT = "FullBright"

    @property
    def code(self) -> int:
        """Device mode code (high nibble of the command byte)."""
        return 0x00


class ConnectionState(str, Enum):
    """Whether the session currently holds an open button."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class TouchState(str, Enum):
    """Debounced state of the touch sensor."""

    IDLE = "idle"
    TOUCHED = "touched"


class MuteState(str, Enum):
    """Microphone state as last applied by the session."""

    MUTED = "muted"
    UNMUTED = "unmuted"
