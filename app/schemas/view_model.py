"""Read-only composed state handed to the presentation layer."""

from pydantic import BaseModel, Field

from .banner import Banner
from .destination import Destination
from .participant import Participant
from .session_state import SessionMode
from .studio_settings import StudioSettings
from .studio_types import LayoutMode, SlotRole


class StageSlot(BaseModel):
    participant: Participant
    role: SlotRole


class Composition(BaseModel):
    """Ordered visual arrangement of on-stage participants."""

    layout: LayoutMode
    slots: list[StageSlot] = Field(default_factory=list)
    # Grid column count, None for non-grid layouts or an empty stage
    columns: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.slots

    @property
    def primary(self) -> StageSlot | None:
        for slot in self.slots:
            if slot.role == SlotRole.PRIMARY:
                return slot
        return None

    @property
    def secondary(self) -> list[StageSlot]:
        return [slot for slot in self.slots if slot.role == SlotRole.SECONDARY]


class ShareLink(BaseModel):
    destination_id: str
    display_name: str
    url: str


class SessionViewModel(BaseModel):
    session_id: str
    session_mode: SessionMode
    elapsed_seconds: int
    elapsed_display: str

    layout: LayoutMode
    slots: list[StageSlot]
    columns: int | None = None

    active_banner: Banner | None = None
    active_destinations: list[Destination]
    # Destinations snapshotted when the running broadcast went live
    broadcast_destinations: list[Destination]
    share_links: list[ShareLink]
    warnings: list[str] = Field(default_factory=list)

    settings: StudioSettings
    participants: list[Participant]
    banners: list[Banner]
