"""Microphone-related exceptions."""

from typing import Optional

from .base import MuteButtonError


class MicrophoneError(MuteButtonError):
    """Querying or changing the microphone mute state failed."""

    recoverable = True
    recovery_hint = "Make sure PulseAudio or PipeWire is running and 'pactl' is installed."

    def __init__(self, operation: str, original_error: Optional[str] = None):
        """
        Args:
            operation: What was being done ("query", "mute", "unmute")
            original_error: Output or exception text from the audio backend
        """
        technical = f"Microphone {operation} failed"
        if original_error:
            technical += f": {original_error}"
        super().__init__(f"Could not {operation} the microphone.", technical_message=technical)
        self.operation = operation
