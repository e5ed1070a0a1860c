"""Pydantic schemas for the studio state model."""

from .banner import Banner
from .destination import Destination, DestinationCredentials
from .participant import Participant, ParticipantDescriptor
from .session_state import SessionEvent, SessionMode
from .studio_settings import StudioSettings, StudioSettingsUpdate
from .studio_types import (
    BannerStyle,
    DestinationPlatform,
    FrameRate,
    LayoutMode,
    ParticipantKind,
    Resolution,
    SlotRole,
)
from .view_model import Composition, SessionViewModel, ShareLink, StageSlot

__all__ = [
    "Banner",
    "BannerStyle",
    "Composition",
    "Destination",
    "DestinationCredentials",
    "DestinationPlatform",
    "FrameRate",
    "LayoutMode",
    "Participant",
    "ParticipantDescriptor",
    "ParticipantKind",
    "Resolution",
    "SessionEvent",
    "SessionMode",
    "SessionViewModel",
    "ShareLink",
    "SlotRole",
    "StageSlot",
    "StudioSettings",
    "StudioSettingsUpdate",
]
