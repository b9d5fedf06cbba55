"""Generic utility modules for mutebutton."""

from .persistence import PydanticPersistence

__all__ = ["PydanticPersistence"]
