"""
Custom exception hierarchy for mutebutton.

## Exception Hierarchy

```
MuteButtonError (base)
├── DeviceError
│   ├── DeviceNotFoundError
│   ├── DeviceBusyError
│   └── DeviceIOError
├── ColorParseError
├── UnsupportedUiMessageError
├── OperationCancelledError
├── MicrophoneError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `MuteButtonError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether a retry can succeed (set per error type)
- `recovery_hint`: Optional suggestion for how to fix the issue

Device errors never escape a running `ButtonSession`: a failed open is
retried with backoff and a failed read or write is treated as the button
being unplugged. They do reach the caller of one-shot operations such as
`mutebutton device cycle-colors`.
"""

from .audio import MicrophoneError
from .base import MuteButtonError, OperationCancelledError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceBusyError, DeviceError, DeviceIOError, DeviceNotFoundError
from .handlers import format_error_for_display, wrap_hid_error, wrap_pydantic_error
from .ui import ColorParseError, UnsupportedUiMessageError

__all__ = [
    "ColorParseError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceBusyError",
    "DeviceError",
    "DeviceIOError",
    "DeviceNotFoundError",
    "MicrophoneError",
    # Base
    "MuteButtonError",
    "OperationCancelledError",
    "UnsupportedUiMessageError",
    # Handlers
    "format_error_for_display",
    "wrap_hid_error",
    "wrap_pydantic_error",
]
