"""Messages exchanged between the button session and the user interface."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UiToButtonMessageType(str, Enum):
    """Requests the UI can send to the button session."""

    MUTE_COLOR = "mute_color"        # data: color name for the muted state
    UNMUTE_COLOR = "unmute_color"    # data: color name for the unmuted state
    MODE = "mode"                    # data: mode name (logged only)
    SHUTTING_DOWN = "shutting_down"  # application is exiting, turn the LED off


class ButtonToUiMessage(str, Enum):
    """Notifications the button session sends to the UI."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    MUTED = "muted"
    UNMUTED = "unmuted"


class InboundUiMessage(BaseModel):
    """A request from the UI to the button session."""

    model_config = ConfigDict(frozen=True)

    kind: UiToButtonMessageType
    data: str = Field(default="", description="Payload, e.g. a color name")

    @classmethod
    def mute_color(cls, name: str) -> "InboundUiMessage":
        return cls(kind=UiToButtonMessageType.MUTE_COLOR, data=name)

    @classmethod
    def unmute_color(cls, name: str) -> "InboundUiMessage":
        return cls(kind=UiToButtonMessageType.UNMUTE_COLOR, data=name)

    @classmethod
    def mode(cls, name: str) -> "InboundUiMessage":
        return cls(kind=UiToButtonMessageType.MODE, data=name)

    @classmethod
    def shutting_down(cls) -> "InboundUiMessage":
        return cls(kind=UiToButtonMessageType.SHUTTING_DOWN)
