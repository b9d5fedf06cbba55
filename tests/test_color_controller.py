"""Tests for LED color output."""

import threading
from unittest.mock import Mock

import pytest

from mutebutton.device import ColorController
from mutebutton.models import ButtonColor
from conftest import FakeHandle


@pytest.fixture
def handle(identity):
    return FakeHandle(identity)


@pytest.fixture
def controller():
    return ColorController(threading.RLock())


@pytest.mark.unit
class TestColorController:
    """Test color writes and failure handling."""

    def test_set_without_handle_is_noop(self, controller):
        assert controller.is_attached is False
        assert controller.set(ButtonColor.RED) is False
        assert controller.last_command is None

    def test_set_writes_command(self, controller, handle):
        controller.attach(handle)
        assert controller.set(ButtonColor.PURPLE) is True
        assert handle.writes == [b'\x00\x05']
        assert controller.last_command == b'\x00\x05'

    def test_detach_stops_writes(self, controller, handle):
        controller.attach(handle)
        controller.detach()
        assert controller.set(ButtonColor.RED) is False
        assert handle.writes == []

    def test_detach_other_handle_ignored(self, controller, handle, identity):
        """Detaching a stale handle leaves the current one attached."""
        controller.attach(handle)
        controller.detach(FakeHandle(identity))
        assert controller.is_attached is True

    def test_write_failure_detaches_and_notifies(self, handle):
        on_failed = Mock()
        controller = ColorController(threading.RLock(), on_write_failed=on_failed)
        controller.attach(handle)
        handle.fail_write = True

        assert controller.set(ButtonColor.RED) is False

        assert controller.is_attached is False
        on_failed.assert_called_once()
        assert on_failed.call_args.args[0].operation == "write"

    def test_write_failure_not_raised_without_callback(self, controller, handle):
        controller.attach(handle)
        handle.fail_write = True
        assert controller.set(ButtonColor.RED) is False
