"""Session logic: connection tracking, touch decoding and the button session."""

from .connection import ConnectionStateTracker
from .session import ButtonSession
from .touch import TouchDecoder

__all__ = ["ButtonSession", "ConnectionStateTracker", "TouchDecoder"]
