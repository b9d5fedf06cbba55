"""Tests for the session/UI message channel."""

import queue
import threading

import pytest

from mutebutton.channel import UiChannel
from mutebutton.exceptions import OperationCancelledError
from mutebutton.models import ButtonToUiMessage, InboundUiMessage, UiToButtonMessageType


@pytest.mark.unit
class TestUiChannel:
    """Test both directions of the channel."""

    def test_notifications_in_order(self, channel):
        channel.send_to_ui(ButtonToUiMessage.CONNECTED)
        channel.send_to_ui(ButtonToUiMessage.MUTED)
        assert channel.receive_from_button(timeout=0.1) is ButtonToUiMessage.CONNECTED
        assert channel.receive_from_button(timeout=0.1) is ButtonToUiMessage.MUTED

    def test_receive_from_button_times_out(self, channel):
        assert channel.receive_from_button(timeout=0.01) is None

    def test_drain(self, channel):
        channel.send_to_ui(ButtonToUiMessage.CONNECTED)
        channel.send_to_ui(ButtonToUiMessage.UNMUTED)
        assert channel.drain_to_ui() == [ButtonToUiMessage.CONNECTED, ButtonToUiMessage.UNMUTED]
        assert channel.drain_to_ui() == []

    def test_request_roundtrip(self, channel):
        channel.send_to_button(InboundUiMessage.mute_color("Blue"))
        message = channel.receive_from_ui(threading.Event())
        assert message.kind is UiToButtonMessageType.MUTE_COLOR
        assert message.data == "Blue"

    def test_receive_from_ui_cancelled(self, channel):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(OperationCancelledError):
            channel.receive_from_ui(cancel)

    def test_receive_from_ui_observes_later_cancel(self, channel):
        cancel = threading.Event()
        timer = threading.Timer(0.05, cancel.set)
        timer.start()
        try:
            with pytest.raises(OperationCancelledError):
                channel.receive_from_ui(cancel)
        finally:
            timer.cancel()

    def test_full_queue_raises(self):
        channel = UiChannel(maxsize=1)
        channel.send_to_ui(ButtonToUiMessage.CONNECTED)
        with pytest.raises(queue.Full):
            channel.send_to_ui(ButtonToUiMessage.MUTED, timeout=0.01)
