"""Enumerations for stage, overlay, destination and studio settings."""

from enum import Enum


class ParticipantKind(str, Enum):
    CAMERA = "camera"
    SCREEN = "screen"

    def __str__(self) -> str:
        return self.value


class LayoutMode(str, Enum):
    """Visual arrangement strategy applied to on-stage participants."""

    GRID = "grid"
    SIDEBAR = "sidebar"
    SPOTLIGHT = "spotlight"
    SOLO = "solo"

    def __str__(self) -> str:
        return self.value


class SlotRole(str, Enum):
    CELL = "cell"
    PRIMARY = "primary"
    SECONDARY = "secondary"

    def __str__(self) -> str:
        return self.value


class BannerStyle(str, Enum):
    STATIC = "static"
    SCROLLING = "scrolling"

    def __str__(self) -> str:
        return self.value


class DestinationPlatform(str, Enum):
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    TWITCH = "twitch"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class Resolution(str, Enum):
    HD = "720p"
    FULL_HD = "1080p"
    UHD = "4k"


class FrameRate(str, Enum):
    FPS_30 = "30fps"
    FPS_60 = "60fps"


__all__ = [
    "BannerStyle",
    "DestinationPlatform",
    "FrameRate",
    "LayoutMode",
    "ParticipantKind",
    "Resolution",
    "SlotRole",
]
