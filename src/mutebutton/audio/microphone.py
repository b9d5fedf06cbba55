"""Microphone mute control."""

import logging
import subprocess
from typing import Protocol, runtime_checkable

from mutebutton.exceptions import MicrophoneError

logger = logging.getLogger(__name__)


@runtime_checkable
class Microphone(Protocol):
    """
    System microphone whose mute state the button controls.

    Implementations are called from the session's reader thread and must be
    safe to use from any thread.
    """

    def is_muted(self) -> bool:
        ...

    def mute(self) -> None:
        ...

    def unmute(self) -> None:
        ...


class PulseAudioMicrophone:
    """Default PulseAudio/PipeWire capture source, controlled through ``pactl``."""

    def __init__(self, source: str = "@DEFAULT_SOURCE@", timeout: float = 5.0):
        """
        Args:
            source: pactl source name or index
            timeout: Seconds to wait for each pactl call
        """
        self.source = source
        self.timeout = timeout

    def _pactl(self, operation: str, *args: str) -> str:
        try:
            result = subprocess.run(
                ['pactl', *args],
                capture_output=True, text=True, timeout=self.timeout
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise MicrophoneError(operation, str(e)) from e
        if result.returncode != 0:
            raise MicrophoneError(operation, result.stderr.strip() or f"exit code {result.returncode}")
        return result.stdout

    def is_muted(self) -> bool:
        # Output: "Mute: yes" / "Mute: no"
        output = self._pactl("query", 'get-source-mute', self.source)
        return output.strip().lower().endswith("yes")

    def mute(self) -> None:
        self._pactl("mute", 'set-source-mute', self.source, '1')
        logger.info(f"Microphone {self.source} muted")

    def unmute(self) -> None:
        self._pactl("unmute", 'set-source-mute', self.source, '0')
        logger.info(f"Microphone {self.source} unmuted")
