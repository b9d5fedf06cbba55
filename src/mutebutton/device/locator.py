"""Mute button discovery via hidapi."""

import logging
from collections.abc import Sequence
from typing import Any

import hid

from mutebutton.exceptions import DeviceBusyError, DeviceNotFoundError
from mutebutton.models import KNOWN_DEVICES, DeviceIdentity

from .handle import HidDeviceHandle

logger = logging.getLogger(__name__)


class DeviceLocator:
    """
    Finds, re-checks and opens mute buttons.

    A device matches when its vendor/product pair is one of ``identities``.
    Only the first match is used; multiple buttons are not supported.
    """

    def __init__(self, identities: Sequence[DeviceIdentity] = KNOWN_DEVICES):
        """
        Initialize the locator.

        Args:
            identities: Vendor/product pairs recognized as a mute button
        """
        self._identities = tuple(identities)

    @property
    def identities(self) -> tuple[DeviceIdentity, ...]:
        return self._identities

    def _match(self, info: dict[str, Any]) -> DeviceIdentity | None:
        vendor_id = info.get('vendor_id', 0)
        product_id = info.get('product_id', 0)
        for identity in self._identities:
            if identity.matches(vendor_id, product_id):
                return identity
        return None

    def find(self) -> DeviceIdentity | None:
        """Enumerate attached HID devices and return the first mute button found."""
        for info in hid.enumerate():
            identity = self._match(info)
            if identity:
                logger.debug(f"Found mute button {identity} at {info.get('path')!r}")
                return identity
        return None

    def still_present(self, identity: DeviceIdentity) -> bool:
        """Check whether a previously found button is still attached."""
        return bool(hid.enumerate(identity.vendor_id, identity.product_id))

    def open(self, identity: DeviceIdentity) -> HidDeviceHandle:
        """
        Open a mute button.

        Raises:
            DeviceNotFoundError: If the button is no longer attached
            DeviceBusyError: If the button is attached but cannot be opened
        """
        if not self.still_present(identity):
            raise DeviceNotFoundError(identity)

        device = hid.device()
        try:
            device.open(identity.vendor_id, identity.product_id)
        except (OSError, ValueError) as e:
            raise DeviceBusyError(identity, original_error=str(e)) from e

        logger.info(f"Opened mute button {identity}")
        return HidDeviceHandle(device, identity)

    def list_devices(self) -> list[dict[str, Any]]:
        """
        List attached mute buttons.

        Returns:
            One dict per matching HID interface with keys identity, path,
            manufacturer, product and serial
        """
        found = []
        for info in hid.enumerate():
            identity = self._match(info)
            if identity is None:
                continue
            path = info.get('path', b'')
            found.append({
                'identity': identity,
                'path': path.decode(errors='replace') if isinstance(path, bytes) else str(path),
                'manufacturer': info.get('manufacturer_string') or "",
                'product': info.get('product_string') or "",
                'serial': info.get('serial_number') or "",
            })
        return found
