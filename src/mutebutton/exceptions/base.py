"""Root of the mutebutton exception hierarchy.

Every error carries two texts: ``user_message`` for the command line and
``technical_message`` for the log file. Whether an error can be retried and
what the user should do about it are properties of the error type, so
subclasses declare ``recoverable`` and a default ``recovery_hint`` as class
attributes instead of passing them on every raise.
"""

from typing import Optional


class MuteButtonError(Exception):
    """Base class for errors raised by mutebutton."""

    #: A retry (reconnect, re-read of the config, next message) can succeed
    recoverable: bool = False
    #: What the user can do about it; instances may override
    recovery_hint: Optional[str] = None

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        if recovery_hint is not None:
            self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"


class OperationCancelledError(MuteButtonError):
    """A blocking wait ended because the session's cancel event was set."""

    recoverable = True

    def __init__(self, operation: str = "operation"):
        super().__init__(f"{operation} was cancelled")
        self.operation = operation
