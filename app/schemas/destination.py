"""Output destination schemas."""

from pydantic import BaseModel, Field

from .studio_types import DestinationPlatform


class DestinationCredentials(BaseModel):
    """Opaque target reference (RTMP URL and stream key for custom destinations)."""

    url: str | None = None
    stream_key: str | None = None


class Destination(BaseModel):
    id: str
    platform: DestinationPlatform
    display_name: str

    # External authorization/target exists
    connected: bool = True
    # Participates in the next broadcast; implies connected
    enabled: bool = True

    credentials: DestinationCredentials | None = Field(default=None, exclude=True)

    def share_link(self, channel_slug: str) -> str | None:
        """Public watch link for the audience, None for custom RTMP targets."""
        if self.platform == DestinationPlatform.CUSTOM:
            return None
        return f"https://{self.platform.value}.com/live/{channel_slug}"
