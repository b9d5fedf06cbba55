"""Exceptions raised while handling messages from the user interface."""

from .base import MuteButtonError


class ColorParseError(MuteButtonError):
    """A color name is not one of the button's supported colors."""

    recoverable = True

    def __init__(self, name: str, valid_names: list[str]):
        """
        Args:
            name: The name that failed to parse
            valid_names: The accepted color names
        """
        super().__init__(
            f"Unknown button color '{name}'",
            recovery_hint=f"Valid colors: {', '.join(valid_names)}",
        )
        self.name = name


class UnsupportedUiMessageError(MuteButtonError, ValueError):
    """The UI sent a message kind the button does not handle.

    The message set is closed and validated where messages are built, so
    this indicates a programming error rather than a runtime condition.
    """

    def __init__(self, kind: object):
        super().__init__(f"'{kind}' is not a supported UI message type.")
        self.kind = kind
