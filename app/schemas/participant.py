"""Participant schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .studio_types import ParticipantKind


class ParticipantDescriptor(BaseModel):
    """Parameters for adding a participant to the registry.

    Stage membership has no default: the caller always states it.
    """

    id: str
    display_name: str
    kind: ParticipantKind = ParticipantKind.CAMERA
    is_local: bool = False
    on_stage: bool
    muted: bool = False
    video_suppressed: bool = False
    share_id: str | None = None


class Participant(BaseModel):
    """A camera or screen feed that can be placed on stage."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    display_name: str
    kind: ParticipantKind
    is_local: bool = False
    on_stage: bool = False
    muted: bool = False
    video_suppressed: bool = False

    # Share-scoped identifier minted when a screen share starts
    share_id: str | None = None

    # Opaque capture resource handle, never inspected or serialized
    media_handle: Any = Field(default=None, exclude=True)
    # Mirrors media_handle presence; set by the registry on attach/detach
    has_media: bool = False

    @property
    def is_local_camera(self) -> bool:
        return self.is_local and self.kind == ParticipantKind.CAMERA

    @classmethod
    def from_descriptor(cls, descriptor: ParticipantDescriptor) -> "Participant":
        return cls(**descriptor.model_dump())
