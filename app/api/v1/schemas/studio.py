from pydantic import BaseModel, Field, field_validator

from app.schemas import (
    BannerStyle,
    DestinationPlatform,
    LayoutMode,
    ParticipantKind,
    SessionMode,
)


class SetLayoutIn(BaseModel):
    layout: LayoutMode = Field(description="grid, sidebar, spotlight or solo")


class SessionModeOut(BaseModel):
    session_id: str
    session_mode: SessionMode
    elapsed_seconds: int
    warnings: list[str] = Field(default_factory=list)


class JoinGuestIn(BaseModel):
    display_name: str = Field(description="Name tag shown on stage")
    on_stage: bool = Field(description="Whether the guest enters the stage immediately")

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("display_name must not be empty")
        return v


class ParticipantIdIn(BaseModel):
    participant_id: str


class SetStageIn(BaseModel):
    participant_id: str
    on_stage: bool


class SetMutedIn(BaseModel):
    participant_id: str
    muted: bool


class SetVideoSuppressedIn(BaseModel):
    participant_id: str
    suppressed: bool


class StartScreenShareIn(BaseModel):
    display_name: str = Field(default="Presentation", description="Name tag of the share")


class EndScreenShareIn(BaseModel):
    share_id: str = Field(description="Share id returned when the share started")


class ParticipantOut(BaseModel):
    participant_id: str
    display_name: str
    kind: ParticipantKind
    on_stage: bool
    share_id: str | None = None
    has_media: bool


class SubmitBannerIn(BaseModel):
    text: str = Field(description="Banner text, must not be blank")
    style: BannerStyle = BannerStyle.STATIC


class BannerIdIn(BaseModel):
    banner_id: str


class BannerOut(BaseModel):
    banner_id: str
    text: str
    style: BannerStyle
    is_active: bool


class AddDestinationIn(BaseModel):
    platform: DestinationPlatform
    display_name: str | None = None
    url: str | None = Field(default=None, description="RTMP server URL (custom only)")
    stream_key: str | None = Field(default=None, description="RTMP stream key (custom only)")


class DestinationIdIn(BaseModel):
    destination_id: str


class SetConnectedIn(BaseModel):
    destination_id: str
    connected: bool


class DestinationOut(BaseModel):
    destination_id: str
    platform: DestinationPlatform
    display_name: str
    connected: bool
    enabled: bool
