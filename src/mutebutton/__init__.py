"""Mutebutton: keeps a MuteMe touch button in sync with the microphone."""

__version__ = "0.1.0"

from .core import ButtonSession

__all__ = [
    "ButtonSession",
]
