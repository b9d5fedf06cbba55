"""CLI commands for mutebutton."""

from .config import config
from .device import device_group

__all__ = ["config", "device_group"]
