"""Data models for the mute button."""

from .config import DEFAULT_CONFIG_PATH, AppConfig
from .device import KNOWN_DEVICES, DeviceIdentity
from .enums import ButtonColor, ButtonMode, ConnectionState, MuteState, TouchState
from .messages import ButtonToUiMessage, InboundUiMessage, UiToButtonMessageType

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "KNOWN_DEVICES",
    "AppConfig",
    # Enums
    "ButtonColor",
    "ButtonMode",
    # Messages
    "ButtonToUiMessage",
    "ConnectionState",
    # Models
    "DeviceIdentity",
    "InboundUiMessage",
    "MuteState",
    "TouchState",
    "UiToButtonMessageType",
]
