"""Studio-wide output settings."""

from pydantic import BaseModel, Field

from .studio_types import FrameRate, Resolution


class StudioSettings(BaseModel):
    resolution: Resolution = Resolution.FULL_HD
    frame_rate: FrameRate = FrameRate.FPS_30
    audio_echo_cancel: bool = True
    show_names: bool = Field(default=True, description="Show name tags on stage")
    mirror_video: bool = Field(default=True, description="Flip the local camera preview")


class StudioSettingsUpdate(BaseModel):
    """Partial update; unset fields keep their current value."""

    resolution: Resolution | None = None
    frame_rate: FrameRate | None = None
    audio_echo_cancel: bool | None = None
    show_names: bool | None = None
    mirror_video: bool | None = None

    def apply(self, settings: StudioSettings) -> StudioSettings:
        return settings.model_copy(update=self.model_dump(exclude_none=True))
