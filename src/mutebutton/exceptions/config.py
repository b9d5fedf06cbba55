"""Errors raised while loading or saving ``~/.mutebutton/config.json``."""

from typing import Any, Optional

from .base import MuteButtonError

# Extra guidance for fields users commonly get wrong
_FIELD_HINTS = {
    "muted_color": "Valid colors: Red, Green, Yellow, Blue, Purple, Cyan, White, NoColor",
    "unmuted_color": "Valid colors: Red, Green, Yellow, Blue, Purple, Cyan, White, NoColor",
    "devices": (
        "Each device needs vendor_id and product_id between 0 and 65535.\n"
        "Run 'mutebutton device list' to see attached buttons"
    ),
    "read_timeout_ms": "The read timeout must be between 1 and 1000 milliseconds",
}


class ConfigurationError(MuteButtonError):
    """The configuration could not be loaded or saved."""

    recoverable = True
    recovery_hint = "Run 'mutebutton config reset' to restore the defaults"


class ConfigFileInvalidError(ConfigurationError):
    """The config file is empty or is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        super().__init__(
            f"Configuration file {file_path} could not be read",
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recovery_hint=(
                f"Fix or delete {file_path}, or run 'mutebutton config reset' "
                "to write a fresh one"
            ),
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config value has the wrong type or is out of range."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        hint = f"Set '{field}' with 'mutebutton config set' or edit it by hand"
        if file_path:
            hint += f" in {file_path}"
        # Nested locations such as "devices.0.vendor_id" use the top-level hint
        extra = _FIELD_HINTS.get(field.split(".")[0])
        if extra:
            hint += f"\n{extra}"

        super().__init__(
            f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recovery_hint=hint,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
