"""Edge-triggered connection state."""

import logging
from threading import Lock

from mutebutton.models import ConnectionState

logger = logging.getLogger(__name__)


class ConnectionStateTracker:
    """
    Tracks whether the button is connected and reports only transitions.

    ``update()`` returns the new state when it differs from the previous
    one and None otherwise, so repeated identical observations produce no
    notifications. The tracker starts out unknown: the first observation
    is always a transition.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._state: ConnectionState | None = None

    @property
    def state(self) -> ConnectionState | None:
        """Current state, or None before the first observation."""
        with self._lock:
            return self._state

    @property
    def is_connected(self) -> bool:
        with self._lock:
            return self._state is ConnectionState.CONNECTED

    def update(self, new_state: ConnectionState) -> ConnectionState | None:
        """
        Record an observation.

        Returns:
            new_state if this is a transition, otherwise None
        """
        with self._lock:
            if new_state is self._state:
                return None
            self._state = new_state

        state = "connected" if new_state is ConnectionState.CONNECTED else "not connected"
        logger.info(f"Button is {state} ...")
        return new_state

    def reset(self) -> None:
        """Forget the current state; the next update() is a transition."""
        with self._lock:
            self._state = None
