"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from mutebutton.utils.persistence import PydanticPersistence

from .device import KNOWN_DEVICES, DeviceIdentity
from .enums import ButtonColor

DEFAULT_CONFIG_DIR = Path.home() / ".mutebutton"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # LED colors
    muted_color: ButtonColor = Field(
        default=ButtonColor.RED, description="LED color while the microphone is muted"
    )
    unmuted_color: ButtonColor = Field(
        default=ButtonColor.GREEN, description="LED color while the microphone is live"
    )

    # Device discovery
    devices: list[DeviceIdentity] = Field(
        default_factory=lambda: list(KNOWN_DEVICES),
        description="USB vendor/product pairs recognized as a mute button",
    )
    device_check_interval: float = Field(
        default=3.0, gt=0, description="How often to check for the button (seconds)"
    )
    open_retry_delay: float = Field(
        default=5.0,
        gt=0,
        description="Wait before retrying when the button is attached but cannot be opened (seconds)",
    )

    # Device I/O
    read_timeout_ms: int = Field(
        default=100, gt=0, le=1000, description="HID read timeout; bounds how fast reads notice cancellation"
    )
    ui_send_timeout: float = Field(
        default=1.0, gt=0, description="How long a notification may wait for room in the UI queue (seconds)"
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.mutebutton/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
