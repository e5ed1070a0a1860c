from fastapi import APIRouter, Depends

from app.api.v1.dependency import get_session_controller
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.studio import (
    EndScreenShareIn,
    JoinGuestIn,
    ParticipantIdIn,
    ParticipantOut,
    SetMutedIn,
    SetStageIn,
    SetVideoSuppressedIn,
    StartScreenShareIn,
)
from app.domain.studio.session.session_controller import SessionController
from app.schemas import Participant

router = APIRouter(prefix="/studio/participant")


def _participant_out(participant: Participant) -> ParticipantOut:
    return ParticipantOut(
        participant_id=participant.id,
        display_name=participant.display_name,
        kind=participant.kind,
        on_stage=participant.on_stage,
        share_id=participant.share_id,
        has_media=participant.has_media,
    )


@router.get("/list_participants")
async def list_participants(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[list[ParticipantOut]]:
    """List participants in insertion order."""
    return ApiOut[list[ParticipantOut]](
        results=[_participant_out(p) for p in controller.participants.list_participants()]
    )


@router.post("/join_guest")
async def join_guest(
    body: JoinGuestIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut]:
    """Register a remote guest that joined the studio."""
    participant = controller.join_guest(body.display_name, on_stage=body.on_stage)
    return ApiOut[ParticipantOut](results=_participant_out(participant))


@router.post("/remove_participant")
async def remove_participant(
    body: ParticipantIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    """Remove a participant. Returns False if it was already gone."""
    removed = controller.remove_participant(body.participant_id)
    return ApiOut[bool](results=removed is not None)


@router.post("/set_stage")
async def set_stage(
    body: SetStageIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut]:
    participant = controller.set_stage_membership(body.participant_id, body.on_stage)
    return ApiOut[ParticipantOut](results=_participant_out(participant))


@router.post("/toggle_stage")
async def toggle_stage(
    body: ParticipantIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut]:
    participant = controller.toggle_stage(body.participant_id)
    return ApiOut[ParticipantOut](results=_participant_out(participant))


@router.post("/set_muted")
async def set_muted(
    body: SetMutedIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    participant = controller.set_muted(body.participant_id, body.muted)
    return ApiOut[bool](results=participant.muted)


@router.post("/set_video_suppressed")
async def set_video_suppressed(
    body: SetVideoSuppressedIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    participant = controller.set_video_suppressed(body.participant_id, body.suppressed)
    return ApiOut[bool](results=participant.video_suppressed)


@router.post("/toggle_local_mute")
async def toggle_local_mute(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    """Toggle the microphone of the local camera. Returns the new muted flag."""
    participant = controller.toggle_local_mute()
    return ApiOut[bool](results=participant.muted)


@router.post("/toggle_local_video")
async def toggle_local_video(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    """Toggle the local camera video. Returns the new suppressed flag."""
    participant = controller.toggle_local_video()
    return ApiOut[bool](results=participant.video_suppressed)


@router.post("/start_camera")
async def start_camera(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut | None]:
    """Acquire the local camera feed. Results is null if the acquisition was superseded."""
    participant = await controller.start_local_camera()
    return ApiOut[ParticipantOut | None](
        results=_participant_out(participant) if participant else None
    )


@router.post("/stop_camera")
async def stop_camera(
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut]:
    participant = controller.stop_local_camera()
    return ApiOut[ParticipantOut](results=_participant_out(participant))


@router.post("/start_screen_share")
async def start_screen_share(
    body: StartScreenShareIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[ParticipantOut]:
    """Acquire a screen capture, put it on stage and switch to the sidebar layout."""
    participant = await controller.start_screen_share(body.display_name)
    return ApiOut[ParticipantOut](results=_participant_out(participant))


@router.post("/end_screen_share")
async def end_screen_share(
    body: EndScreenShareIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    """Capture resource reported the share ended. Unknown shares are ignored."""
    removed = controller.end_screen_share(body.share_id)
    return ApiOut[bool](results=removed is not None)


@router.post("/stop_screen_share")
async def stop_screen_share(
    body: ParticipantIdIn,
    controller: SessionController = Depends(get_session_controller),
) -> ApiOut[bool]:
    removed = controller.stop_screen_share(body.participant_id)
    return ApiOut[bool](results=removed is not None)
