"""Participant registry: stage membership and local media flags."""

from typing import Any

from loguru import logger

from app.schemas import Participant, ParticipantDescriptor
from app.utils.studio_errors import StudioError, StudioErrorCode


class ParticipantRegistry:
    """Owns the set of participants in insertion order.

    The registry never talks to the capture provider. The session controller
    acquires handles and attaches them here once they resolve.
    """

    def __init__(self) -> None:
        self._participants: dict[str, Participant] = {}

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: str) -> bool:
        return participant_id in self._participants

    def _require(self, participant_id: str) -> Participant:
        participant = self._participants.get(participant_id)
        if participant is None:
            raise StudioError(
                errcode=StudioErrorCode.E_NOT_FOUND,
                errmesg=f"Participant not found: {participant_id}",
            )
        return participant

    def add_participant(self, descriptor: ParticipantDescriptor) -> Participant:
        """Add a participant.

        Raises:
            StudioError: E_DUPLICATE_PARTICIPANT if the id is taken, or if a
                second local camera is added.
        """
        if descriptor.id in self._participants:
            raise StudioError(
                errcode=StudioErrorCode.E_DUPLICATE_PARTICIPANT,
                errmesg=f"Participant already exists: {descriptor.id}",
            )

        participant = Participant.from_descriptor(descriptor)
        if participant.is_local_camera and self.local_camera() is not None:
            raise StudioError(
                errcode=StudioErrorCode.E_DUPLICATE_PARTICIPANT,
                errmesg="A local camera participant already exists",
            )

        self._participants[participant.id] = participant
        logger.info(
            f"Participant {participant.id} added "
            f"(kind={participant.kind}, local={participant.is_local}, on_stage={participant.on_stage})"
        )
        return participant

    def remove_participant(self, participant_id: str) -> Participant | None:
        """Remove a participant. Removing an unknown id is a no-op."""
        participant = self._participants.pop(participant_id, None)
        if participant is None:
            logger.debug(f"Participant {participant_id} already removed, skipping")
            return None
        logger.info(f"Participant {participant_id} removed")
        return participant

    def get(self, participant_id: str) -> Participant:
        return self._require(participant_id)

    def find(self, participant_id: str) -> Participant | None:
        return self._participants.get(participant_id)

    def find_by_share(self, share_id: str) -> Participant | None:
        for participant in self._participants.values():
            if participant.share_id == share_id:
                return participant
        return None

    def local_camera(self) -> Participant | None:
        for participant in self._participants.values():
            if participant.is_local_camera:
                return participant
        return None

    def list_participants(self) -> list[Participant]:
        return list(self._participants.values())

    def on_stage(self) -> list[Participant]:
        return [p for p in self._participants.values() if p.on_stage]

    def set_stage_membership(self, participant_id: str, on_stage: bool) -> Participant:
        participant = self._require(participant_id)
        participant.on_stage = on_stage
        logger.info(f"Participant {participant_id} on_stage={on_stage}")
        return participant

    def toggle_stage(self, participant_id: str) -> Participant:
        participant = self._require(participant_id)
        return self.set_stage_membership(participant_id, not participant.on_stage)

    def set_muted(self, participant_id: str, muted: bool) -> Participant:
        participant = self._require(participant_id)
        participant.muted = muted
        logger.info(f"Participant {participant_id} muted={muted}")
        return participant

    def set_video_suppressed(self, participant_id: str, suppressed: bool) -> Participant:
        participant = self._require(participant_id)
        participant.video_suppressed = suppressed
        logger.info(f"Participant {participant_id} video_suppressed={suppressed}")
        return participant

    def attach_handle(self, participant_id: str, handle: Any) -> Participant:
        participant = self._require(participant_id)
        participant.media_handle = handle
        participant.has_media = handle is not None
        logger.debug(f"Media handle attached to participant {participant_id}")
        return participant

    def detach_handle(self, participant_id: str) -> Any:
        """Null the participant's handle and return the previous one."""
        participant = self._require(participant_id)
        handle, participant.media_handle = participant.media_handle, None
        participant.has_media = False
        return handle
