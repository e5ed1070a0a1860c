"""Media capture provider port.

The studio never touches pixels or audio. It asks a capture provider for a
camera or screen resource and keeps the returned handle as an opaque value.

Usage:
    from app.services.integrations.capture_service import get_capture_provider

    provider = get_capture_provider()
    handle = await provider.acquire(ParticipantKind.SCREEN)
    ...
    provider.release(handle)
"""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger
from pydantic import BaseModel

from app.app_config import get_app_environ_config
from app.domain.utils.idgen import new_ulid
from app.schemas import ParticipantKind
from app.utils.studio_errors import StudioError, StudioErrorCode


class MediaCaptureProvider(Protocol):
    async def acquire(self, kind: ParticipantKind) -> Any:
        """Acquire a capture resource; raise on denial or failure."""
        ...

    def release(self, handle: Any) -> None:
        """Give a capture resource back synchronously. Releasing twice is harmless."""
        ...


class MediaHandle(BaseModel):
    """Handle issued by the in-process capture stub."""

    handle_id: str
    kind: ParticipantKind


class StubCaptureProvider:
    """In-process capture provider used in DEMO_MODE and tests.

    Issues ``MediaHandle`` objects immediately and tracks which are live.
    Setting ``deny`` makes every acquisition fail, mimicking a user who
    dismisses the browser permission prompt.
    """

    def __init__(self, deny: bool = False) -> None:
        self.deny = deny
        self.live_handles: dict[str, MediaHandle] = {}
        self.released: list[MediaHandle] = []

    async def acquire(self, kind: ParticipantKind) -> MediaHandle:
        if self.deny:
            logger.info(f"StubCaptureProvider: {kind} acquisition denied")
            raise StudioError(
                errcode=StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED,
                errmesg=f"Permission denied for {kind} capture",
            )

        handle = MediaHandle(handle_id=new_ulid("mh_"), kind=kind)
        self.live_handles[handle.handle_id] = handle
        logger.info(f"StubCaptureProvider DEMO_MODE=true: issued {kind} handle {handle.handle_id}")
        return handle

    def release(self, handle: Any) -> None:
        handle_id = getattr(handle, "handle_id", None)
        released = self.live_handles.pop(handle_id, None) if handle_id else None
        if released is not None:
            self.released.append(released)
            logger.info(f"StubCaptureProvider: released handle {handle_id}")


class UnavailableCaptureProvider:
    """Provider used outside DEMO_MODE when no capture bridge is wired in."""

    async def acquire(self, kind: ParticipantKind) -> Any:
        logger.error(f"No media capture provider configured, cannot acquire {kind}")
        raise StudioError(
            errcode=StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED,
            errmesg="Media capture provider is not configured",
        )

    def release(self, handle: Any) -> None:
        return None


def get_capture_provider() -> MediaCaptureProvider:
    if get_app_environ_config().DEMO_MODE:
        return StubCaptureProvider()
    return UnavailableCaptureProvider()
