"""Touch sensor debouncing."""

import logging

from mutebutton.device.protocol import TouchEvent, decode_report
from mutebutton.models import TouchState

logger = logging.getLogger(__name__)


class TouchDecoder:
    """
    Debounces touch sensor events into complete touch/release cycles.

    A release only counts when it follows a touch, and a touch while
    already touched is ignored, so duplicate events from the sensor never
    toggle twice.

    Not thread-safe: callers hold the session's device lock.
    """

    def __init__(self) -> None:
        self._state = TouchState.IDLE

    @property
    def state(self) -> TouchState:
        return self._state

    def reset(self) -> None:
        self._state = TouchState.IDLE

    def feed(self, event: TouchEvent) -> bool:
        """
        Apply one decoded event.

        Returns:
            True if the event completed a touch/release cycle
        """
        if event is TouchEvent.TOUCHED:
            if self._state is TouchState.IDLE:
                self._state = TouchState.TOUCHED
                logger.debug("Button touched")
            return False

        if event is TouchEvent.UNTOUCHED:
            if self._state is TouchState.TOUCHED:
                self._state = TouchState.IDLE
                logger.debug("Button released")
                return True
            return False

        # IDLE and UNKNOWN leave the state alone
        return False

    def feed_report(self, report: bytes) -> bool:
        """Decode a raw input report and apply it."""
        return self.feed(decode_report(report))
