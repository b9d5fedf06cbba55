"""Microphone control used by the button session."""

from .microphone import Microphone, PulseAudioMicrophone

__all__ = ["Microphone", "PulseAudioMicrophone"]
