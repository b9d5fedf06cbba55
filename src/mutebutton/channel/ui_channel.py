"""Message channel between the button session and the user interface."""

import logging
import queue
import threading

from mutebutton.exceptions import OperationCancelledError
from mutebutton.models import ButtonToUiMessage, InboundUiMessage

logger = logging.getLogger(__name__)


class UiChannel:
    """
    Two thread-safe queues, one per direction.

    The button side sends notifications with ``send_to_ui`` and waits for
    requests with ``receive_from_ui``; the UI side uses ``send_to_button``
    and ``receive_from_button``.
    """

    def __init__(self, maxsize: int = 64, poll_interval: float = 0.1):
        """
        Args:
            maxsize: Capacity of each queue (0 = unbounded)
            poll_interval: How often a blocked receive re-checks cancellation (seconds)
        """
        self._to_ui: queue.Queue[ButtonToUiMessage] = queue.Queue(maxsize)
        self._to_button: queue.Queue[InboundUiMessage] = queue.Queue(maxsize)
        self._poll_interval = poll_interval

    # Button side

    def send_to_ui(self, message: ButtonToUiMessage, timeout: float | None = 1.0) -> None:
        """
        Queue a notification for the UI.

        Raises:
            queue.Full: If the UI has not drained the queue within timeout
        """
        self._to_ui.put(message, timeout=timeout)

    def receive_from_ui(self, cancel: threading.Event) -> InboundUiMessage:
        """
        Block until the UI sends a request.

        Raises:
            OperationCancelledError: If cancel is set before a message arrives
        """
        while not cancel.is_set():
            try:
                return self._to_button.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
        raise OperationCancelledError("receive from UI")

    # UI side

    def send_to_button(self, message: InboundUiMessage, timeout: float | None = 1.0) -> None:
        """Queue a request for the button session."""
        self._to_button.put(message, timeout=timeout)

    def receive_from_button(self, timeout: float | None = None) -> ButtonToUiMessage | None:
        """Wait for the next notification; None if none arrived within timeout."""
        try:
            return self._to_ui.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain_to_ui(self) -> list[ButtonToUiMessage]:
        """Remove and return every pending notification without blocking."""
        messages = []
        while True:
            try:
                messages.append(self._to_ui.get_nowait())
            except queue.Empty:
                return messages
