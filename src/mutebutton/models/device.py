"""Device identity model."""

from pydantic import BaseModel, ConfigDict, Field


class DeviceIdentity(BaseModel):
    """USB vendor/product pair identifying a class of mute button.

    Frozen so identities can be cached and used as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    vendor_id: int = Field(ge=0, le=0xFFFF, description="USB vendor ID")
    product_id: int = Field(ge=0, le=0xFFFF, description="USB product ID")

    def __str__(self) -> str:
        return f"{self.vendor_id:04x}:{self.product_id:04x}"

    def matches(self, vendor_id: int, product_id: int) -> bool:
        """Check whether an enumerated device has this identity."""
        return self.vendor_id == vendor_id and self.product_id == product_id


# MuteMe Original (two firmware generations) and MuteMe Mini
KNOWN_DEVICES: tuple[DeviceIdentity, ...] = (
    DeviceIdentity(vendor_id=0x16C0, product_id=0x27DB),
    DeviceIdentity(vendor_id=0x20A0, product_id=0x42DA),
    DeviceIdentity(vendor_id=0x20A0, product_id=0x42DB),
)
