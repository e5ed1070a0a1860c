"""Broadcast transport port.

The real encode/upload pipeline lives outside the studio. The studio only
tells it when a session ends so recorded tracks can be exported; the returned
artifact reference is opaque.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from loguru import logger
from pydantic import BaseModel, Field

from app.domain.utils.idgen import new_ulid
from app.domain.utils.time_format import utc_now
from app.schemas import SessionMode


class SessionSummary(BaseModel):
    """Snapshot of the session handed over on finalize."""

    session_id: str
    final_mode: SessionMode = Field(description="Mode the session was in before going idle")
    elapsed_seconds: int
    was_live: bool = Field(description="Session broadcast at some point since leaving idle")
    was_recording: bool = Field(description="Session recorded at some point since leaving idle")
    destination_ids: list[str] = Field(default_factory=list, description="Every destination broadcast to")
    participant_ids: list[str] = Field(default_factory=list)
    ended_at: datetime = Field(default_factory=utc_now)


class BroadcastTransport(Protocol):
    def finalize_session(self, summary: SessionSummary) -> str:
        """Finalize the session and return an opaque reference to exported artifacts.

        Called synchronously from the transition into idle; long-running export
        work belongs behind this call, not in it.
        """
        ...


class LoggingBroadcastTransport:
    """Transport stub that records finalize calls and logs them."""

    def __init__(self) -> None:
        self.finalized: list[SessionSummary] = []

    def finalize_session(self, summary: SessionSummary) -> str:
        self.finalized.append(summary)
        artifact_ref = new_ulid("ar_")
        logger.info(
            f"Session {summary.session_id} finalized: mode={summary.final_mode} "
            f"elapsed={summary.elapsed_seconds}s destinations={len(summary.destination_ids)} "
            f"artifact={artifact_ref}"
        )
        return artifact_ref


def get_broadcast_transport() -> BroadcastTransport:
    return LoggingBroadcastTransport()
