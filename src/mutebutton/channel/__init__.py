"""Session <-> UI messaging."""

from .ui_channel import UiChannel

__all__ = ["UiChannel"]
