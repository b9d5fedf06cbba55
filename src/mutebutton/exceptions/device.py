"""Errors raised while finding, opening or talking to the mute button.

All of them are recoverable: the session reacts by backing off and looking
for the button again. They carry the ``DeviceIdentity`` involved, if known.
"""

from typing import TYPE_CHECKING, Optional

from .base import MuteButtonError

if TYPE_CHECKING:
    from mutebutton.models import DeviceIdentity


class DeviceError(MuteButtonError):
    """Base class for mute button hardware errors."""

    recoverable = True

    def __init__(
        self,
        user_message: str,
        identity: Optional["DeviceIdentity"] = None,
        technical_message: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message, technical_message, recovery_hint)
        self.identity = identity


class DeviceNotFoundError(DeviceError):
    """No mute button matching the known identities is attached."""

    recovery_hint = (
        "Check that the button is plugged in. "
        "Run 'mutebutton device list' to see attached buttons."
    )

    def __init__(self, identity: Optional["DeviceIdentity"] = None):
        if identity is None:
            message = "No mute button found."
        else:
            message = f"Mute button {identity} not found."
        super().__init__(message, identity)


class DeviceBusyError(DeviceError):
    """The button is enumerated but hidapi could not open it."""

    recovery_hint = (
        "Close other applications that control the button. On Linux, make sure "
        "a udev rule grants your user access to the hidraw device."
    )

    def __init__(self, identity: Optional["DeviceIdentity"] = None, original_error: Optional[str] = None):
        technical = f"Opening {identity or 'mute button'} failed"
        if original_error:
            technical += f": {original_error}"
        super().__init__(
            "Mute button is attached but could not be opened.",
            identity,
            technical_message=technical,
        )


class DeviceIOError(DeviceError):
    """A read from or write to the open button failed, usually because it was unplugged."""

    def __init__(
        self,
        operation: str,
        original_error: Optional[str] = None,
        identity: Optional["DeviceIdentity"] = None,
    ):
        technical = f"HID {operation} on {identity or 'mute button'} failed"
        if original_error:
            technical += f": {original_error}"
        super().__init__(
            f"Mute button {operation} failed, the device was probably unplugged.",
            identity,
            technical_message=technical,
        )
        self.operation = operation
