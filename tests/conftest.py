"""Pytest fixtures for tests."""

import collections
import time
from unittest.mock import Mock

import pytest

from mutebutton.audio import Microphone
from mutebutton.channel import UiChannel
from mutebutton.core import ButtonSession
from mutebutton.exceptions import DeviceBusyError, DeviceIOError, DeviceNotFoundError
from mutebutton.models import DeviceIdentity


def make_report(touch_value: int) -> bytes:
    """Build an 8-byte input report with the given touch byte."""
    return bytes([0, 0, 0, 0, touch_value, 0, 0, 0])


class FakeHandle:
    """Stands in for HidDeviceHandle: scripted reads, recorded writes."""

    def __init__(self, identity: DeviceIdentity):
        self.identity = identity
        self.reads = collections.deque()
        self.writes = []
        self.close_calls = 0
        self.fail_read = False
        self.fail_write = False

    @property
    def is_open(self) -> bool:
        return self.close_calls == 0

    def read(self, length: int, timeout_ms: int) -> bytes:
        if self.fail_read:
            raise DeviceIOError("read", "device unplugged", self.identity)
        if self.reads:
            return self.reads.popleft()
        time.sleep(timeout_ms / 1000)
        return b''

    def write(self, report: bytes) -> int:
        if self.fail_write:
            raise DeviceIOError("write", "device unplugged", self.identity)
        self.writes.append(bytes(report))
        return len(report)

    def close(self) -> None:
        self.close_calls += 1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FakeLocator:
    """Stands in for DeviceLocator; tests plug and unplug the button."""

    def __init__(self, identity: DeviceIdentity | None = None):
        self.identity = identity or DeviceIdentity(vendor_id=0x20A0, product_id=0x42DA)
        self.present = False
        self.busy = False
        self.fail_reads = False
        self.opened: list[FakeHandle] = []

    @property
    def handle(self) -> FakeHandle | None:
        """The most recently opened handle."""
        return self.opened[-1] if self.opened else None

    def find(self) -> DeviceIdentity | None:
        return self.identity if self.present else None

    def still_present(self, identity: DeviceIdentity) -> bool:
        return self.present and identity == self.identity

    def open(self, identity: DeviceIdentity) -> FakeHandle:
        if not self.still_present(identity):
            raise DeviceNotFoundError(identity)
        if self.busy:
            raise DeviceBusyError(identity, original_error="open failed")
        handle = FakeHandle(identity)
        handle.fail_read = self.fail_reads
        self.opened.append(handle)
        return handle


@pytest.fixture
def identity():
    return DeviceIdentity(vendor_id=0x20A0, product_id=0x42DA)


@pytest.fixture
def locator(identity):
    return FakeLocator(identity)


@pytest.fixture
def microphone():
    """Unmuted microphone mock."""
    mic = Mock(spec=Microphone)
    mic.is_muted.return_value = False
    return mic


@pytest.fixture
def channel():
    return UiChannel(poll_interval=0.01)


@pytest.fixture
def session(microphone, channel, locator):
    """ButtonSession wired to fakes; background loops are cancelled on teardown."""
    session = ButtonSession(
        microphone,
        channel,
        locator=locator,
        device_check_interval=0.05,
        open_retry_delay=0.1,
        read_timeout_ms=10,
        ui_send_timeout=0.1,
    )
    yield session
    session.stop()
    session.shutdown()


def wait_for(predicate, timeout: float = 2.0) -> bool:
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()
