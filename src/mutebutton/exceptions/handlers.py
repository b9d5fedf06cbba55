"""
Error conversion and display helpers.

| Scenario | Use This |
|----------|----------|
| Config file fails pydantic validation | `wrap_pydantic_error(error, path)` |
| hidapi raised while talking to the button | `wrap_hid_error(error, "read")` |
| Show any error on the command line | `format_error_for_display(error)` |
"""

from typing import TYPE_CHECKING, Optional

from .base import MuteButtonError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import DeviceIOError

if TYPE_CHECKING:
    from mutebutton.models import DeviceIdentity


def wrap_pydantic_error(error: Exception, file_path: str) -> MuteButtonError:
    """
    Convert Pydantic validation errors to mutebutton exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def wrap_hid_error(error: Exception, operation: str, identity: Optional["DeviceIdentity"] = None) -> DeviceIOError:
    """
    Convert a low-level hidapi error into a DeviceIOError.

    hidapi signals failures with OSError (read/write errors) and ValueError
    (operation on a closed handle).
    """
    return DeviceIOError(operation, original_error=str(error) or type(error).__name__, identity=identity)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, MuteButtonError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
