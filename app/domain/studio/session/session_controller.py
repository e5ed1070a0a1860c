"""Session controller - composes the studio components into one broadcast session."""

from collections.abc import Callable
from typing import Any

from loguru import logger

from app.domain.studio.destination.destination_manager import DestinationManager
from app.domain.studio.overlay.overlay_scheduler import OverlayScheduler
from app.domain.studio.participant.participant_registry import ParticipantRegistry
from app.domain.studio.stage.stage_compositor import StageCompositor
from app.domain.utils.idgen import new_participant_id, new_session_id, new_share_id
from app.domain.utils.time_format import format_elapsed
from app.schemas import (
    Banner,
    BannerStyle,
    Destination,
    DestinationCredentials,
    DestinationPlatform,
    LayoutMode,
    Participant,
    ParticipantDescriptor,
    ParticipantKind,
    SessionEvent,
    SessionMode,
    SessionViewModel,
    StudioSettings,
    StudioSettingsUpdate,
)
from app.services.integrations.broadcast_transport import BroadcastTransport, SessionSummary
from app.services.integrations.capture_service import MediaCaptureProvider
from app.utils.studio_errors import StudioError, StudioErrorCode

from .session_state_machine import SessionStateMachine

LOCAL_CAMERA_ID = "local-1"
SCREEN_SHARE_NAME = "Presentation"
WARNING_NO_ENABLED_DESTINATIONS = "no_enabled_destinations"

DEFAULT_BANNERS: list[tuple[str, BannerStyle, bool]] = [
    ("Welcome to Founder Storys Studio!", BannerStyle.SCROLLING, True),
    ("Live Episode: Market Disruption", BannerStyle.STATIC, False),
]

ViewModelListener = Callable[[SessionViewModel], None]


class SessionController:
    """Top-level state machine for one broadcast session.

    Owns the session mode, the elapsed counter and the active layout, and
    bridges the capture provider with the participant registry. Every
    successful mutation pushes the recomposed view model to subscribed
    listeners; failed operations leave state untouched and notify nobody.
    """

    def __init__(
        self,
        capture: MediaCaptureProvider,
        transport: BroadcastTransport,
        host_name: str = "You (Host)",
        channel_slug: str = "founder-storys",
        seed_defaults: bool = True,
    ):
        self.session_id = new_session_id()
        self.capture = capture
        self.transport = transport
        self.channel_slug = channel_slug

        self.participants = ParticipantRegistry()
        self.overlays = OverlayScheduler()
        self.destinations = DestinationManager()
        self.settings = StudioSettings()

        self._mode = SessionMode.IDLE
        self._elapsed_seconds = 0
        self._layout = LayoutMode.GRID
        self._broadcast_destinations: list[Destination] = []
        # Accumulated since the session last left idle, for the finalize summary
        self._was_live = False
        self._was_recording = False
        self._session_destination_ids: list[str] = []
        self._listeners: list[ViewModelListener] = []
        # participant_id -> token of the newest pending camera acquisition
        self._pending_acquisitions: dict[str, object] = {}
        self.last_artifact_ref: str | None = None

        if seed_defaults:
            self._seed_defaults(host_name)

        logger.info(f"SessionController {self.session_id} initialized")

    def _seed_defaults(self, host_name: str) -> None:
        self.participants.add_participant(
            ParticipantDescriptor(
                id=LOCAL_CAMERA_ID,
                display_name=host_name,
                kind=ParticipantKind.CAMERA,
                is_local=True,
                on_stage=True,
            )
        )
        active_id = None
        for text, style, is_active in DEFAULT_BANNERS:
            banner = self.overlays.submit_banner(text, style)
            if is_active:
                active_id = banner.id
        active = self.overlays.active_banner()
        if active_id is not None and (active is None or active.id != active_id):
            self.overlays.toggle_active(active_id)

    # ==================== STATE ====================

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def layout(self) -> LayoutMode:
        return self._layout

    @property
    def broadcast_destinations(self) -> list[Destination]:
        return list(self._broadcast_destinations)

    def warnings(self) -> list[str]:
        warnings = []
        if self._mode.is_live and not self._broadcast_destinations:
            warnings.append(WARNING_NO_ENABLED_DESTINATIONS)
        return warnings

    def get_view_model(self) -> SessionViewModel:
        """Compose the read-only view of the current state."""
        participants = [p.model_copy() for p in self.participants.list_participants()]
        composition = StageCompositor.compose(participants, self._layout)
        banners = [b.model_copy() for b in self.overlays.list_banners()]
        active_banner = next((b for b in banners if b.is_active), None)

        return SessionViewModel(
            session_id=self.session_id,
            session_mode=self._mode,
            elapsed_seconds=self._elapsed_seconds,
            elapsed_display=format_elapsed(self._elapsed_seconds),
            layout=composition.layout,
            slots=composition.slots,
            columns=composition.columns,
            active_banner=active_banner,
            active_destinations=[d.model_copy() for d in self.destinations.list_enabled()],
            broadcast_destinations=[d.model_copy() for d in self._broadcast_destinations],
            share_links=self.destinations.share_links(self.channel_slug),
            warnings=self.warnings(),
            settings=self.settings.model_copy(),
            participants=participants,
            banners=banners,
        )

    # ==================== CHANGE NOTIFICATION ====================

    def subscribe(self, listener: ViewModelListener) -> Callable[[], None]:
        """Register a listener called with the view model after every mutation.

        Returns:
            Callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        view_model = self.get_view_model()
        for listener in list(self._listeners):
            try:
                listener(view_model)
            except Exception:
                logger.exception(f"View model listener {listener!r} failed")

    # ==================== MODE TRANSITIONS ====================

    def apply_event(self, event: SessionEvent) -> SessionMode:
        """Apply an operator event to the session mode.

        Raises:
            StudioError: E_INVALID_TRANSITION if the event is undefined for the
                current mode. State is left unchanged.
        """
        current = self._mode
        new_mode = SessionStateMachine.next_mode(current, event)
        if new_mode is None:
            raise StudioError(
                errcode=StudioErrorCode.E_INVALID_TRANSITION,
                errmesg=f"Invalid session transition: {current} --{event}-->",
            )

        summary = None
        if SessionStateMachine.finalizes(current, event):
            summary = self._build_summary(current)

        if new_mode.is_live and not current.is_live:
            self._broadcast_destinations = [
                d.model_copy() for d in self.destinations.list_enabled()
            ]
            for destination in self._broadcast_destinations:
                if destination.id not in self._session_destination_ids:
                    self._session_destination_ids.append(destination.id)
            if not self._broadcast_destinations:
                logger.warning(f"Session {self.session_id} going live with no enabled destinations")
        elif current.is_live and not new_mode.is_live:
            self._broadcast_destinations = []

        self._mode = new_mode
        self._was_live = self._was_live or new_mode.is_live
        self._was_recording = self._was_recording or new_mode.is_recording
        if new_mode == SessionMode.IDLE:
            self._elapsed_seconds = 0
            self._was_live = False
            self._was_recording = False
            self._session_destination_ids = []

        logger.info(f"Session {self.session_id} {current} --{event}--> {new_mode}")

        if summary is not None:
            self._finalize(summary)

        self._notify()
        return new_mode

    def _build_summary(self, final_mode: SessionMode) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            final_mode=final_mode,
            elapsed_seconds=self._elapsed_seconds,
            was_live=self._was_live,
            was_recording=self._was_recording,
            destination_ids=list(self._session_destination_ids),
            participant_ids=[p.id for p in self.participants.list_participants()],
        )

    def _finalize(self, summary: SessionSummary) -> None:
        # The session is already idle; a transport failure must not undo that
        try:
            self.last_artifact_ref = self.transport.finalize_session(summary)
        except Exception:
            logger.exception(f"Broadcast transport failed to finalize session {self.session_id}")

    def go_live(self) -> SessionMode:
        return self.apply_event(SessionEvent.GO_LIVE)

    def stop_broadcast(self) -> SessionMode:
        return self.apply_event(SessionEvent.STOP_BROADCAST)

    def start_recording(self) -> SessionMode:
        return self.apply_event(SessionEvent.START_RECORDING)

    def stop_recording(self) -> SessionMode:
        return self.apply_event(SessionEvent.STOP_RECORDING)

    def toggle_live(self) -> SessionMode:
        """Single live button: stop the broadcast if live, otherwise go live."""
        if self._mode.is_live:
            return self.stop_broadcast()
        return self.go_live()

    def toggle_recording(self) -> SessionMode:
        """Single record button: stop recording if recording, otherwise start."""
        if self._mode.is_recording:
            return self.stop_recording()
        return self.start_recording()

    def tick(self, seconds: int = 1) -> int:
        """Advance the elapsed counter; a no-op while idle."""
        if seconds < 0:
            raise StudioError(
                errcode=StudioErrorCode.E_INVALID_REQUEST,
                errmesg="Elapsed time cannot go backwards",
            )
        if self._mode == SessionMode.IDLE or seconds == 0:
            return self._elapsed_seconds
        self._elapsed_seconds += seconds
        self._notify()
        return self._elapsed_seconds

    # ==================== LAYOUT & SETTINGS ====================

    def set_layout(self, layout: LayoutMode) -> LayoutMode:
        if layout != self._layout:
            logger.info(f"Session {self.session_id} layout {self._layout} -> {layout}")
            self._layout = layout
        self._notify()
        return self._layout

    def update_settings(self, update: StudioSettingsUpdate) -> StudioSettings:
        self.settings = update.apply(self.settings)
        logger.info(f"Studio settings updated: {update.model_dump(exclude_none=True)}")
        self._notify()
        return self.settings

    # ==================== PARTICIPANTS ====================

    def add_participant(self, descriptor: ParticipantDescriptor) -> Participant:
        """Register a participant, e.g. a remote guest who joined."""
        participant = self.participants.add_participant(descriptor)
        self._notify()
        return participant

    def join_guest(self, display_name: str, on_stage: bool) -> Participant:
        return self.add_participant(
            ParticipantDescriptor(
                id=new_participant_id(),
                display_name=display_name,
                kind=ParticipantKind.CAMERA,
                is_local=False,
                on_stage=on_stage,
            )
        )

    def remove_participant(self, participant_id: str) -> Participant | None:
        """Remove a participant and release its capture resource. Idempotent."""
        self._pending_acquisitions.pop(participant_id, None)
        participant = self.participants.remove_participant(participant_id)
        if participant is None:
            return None
        if participant.media_handle is not None:
            self._release(participant.media_handle)
        self._notify()
        return participant

    def set_stage_membership(self, participant_id: str, on_stage: bool) -> Participant:
        participant = self.participants.set_stage_membership(participant_id, on_stage)
        self._notify()
        return participant

    def toggle_stage(self, participant_id: str) -> Participant:
        participant = self.participants.toggle_stage(participant_id)
        self._notify()
        return participant

    def set_muted(self, participant_id: str, muted: bool) -> Participant:
        participant = self.participants.set_muted(participant_id, muted)
        self._notify()
        return participant

    def set_video_suppressed(self, participant_id: str, suppressed: bool) -> Participant:
        participant = self.participants.set_video_suppressed(participant_id, suppressed)
        self._notify()
        return participant

    def _require_local_camera(self) -> Participant:
        local = self.participants.local_camera()
        if local is None:
            raise StudioError(
                errcode=StudioErrorCode.E_NOT_FOUND,
                errmesg="Local camera participant not found",
            )
        return local

    def toggle_local_mute(self) -> Participant:
        """Mute control of the studio: only affects the local camera."""
        local = self._require_local_camera()
        return self.set_muted(local.id, not local.muted)

    def toggle_local_video(self) -> Participant:
        """Camera control of the studio: only affects the local camera."""
        local = self._require_local_camera()
        return self.set_video_suppressed(local.id, not local.video_suppressed)

    # ==================== MEDIA CAPTURE ====================

    def _release(self, handle: Any) -> None:
        try:
            self.capture.release(handle)
        except Exception:
            logger.exception("Capture provider failed to release handle")

    async def _acquire(self, kind: ParticipantKind) -> Any:
        try:
            return await self.capture.acquire(kind)
        except StudioError as e:
            if e.code == StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED:
                raise
            raise StudioError(
                errcode=StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED,
                errmesg=f"Failed to acquire {kind} capture: {e.errmesg}",
            ) from e
        except Exception as e:
            logger.warning(f"Capture provider failed to acquire {kind}: {e}")
            raise StudioError(
                errcode=StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED,
                errmesg=f"Failed to acquire {kind} capture: {e}",
            ) from e

    async def start_local_camera(self) -> Participant | None:
        """Acquire the camera/microphone feed for the local camera participant.

        If the participant is removed, or a newer acquisition is started,
        while this one is pending, the result is discarded and the handle
        released.

        Returns:
            The participant with its handle attached, or None if discarded

        Raises:
            StudioError: E_NOT_FOUND if there is no local camera,
                E_RESOURCE_ACQUISITION_FAILED if the provider declined.
        """
        local = self._require_local_camera()
        token = object()
        self._pending_acquisitions[local.id] = token

        try:
            handle = await self._acquire(ParticipantKind.CAMERA)
        except StudioError:
            if self._pending_acquisitions.get(local.id) is token:
                del self._pending_acquisitions[local.id]
            raise

        if self._pending_acquisitions.get(local.id) is not token or local.id not in self.participants:
            logger.info(f"Discarding camera acquisition for participant {local.id}: no longer pending")
            self._release(handle)
            return None

        del self._pending_acquisitions[local.id]
        previous = self.participants.detach_handle(local.id)
        if previous is not None:
            self._release(previous)
        participant = self.participants.attach_handle(local.id, handle)
        self._notify()
        return participant

    def stop_local_camera(self) -> Participant:
        """Release the local camera feed; the participant stays registered."""
        local = self._require_local_camera()
        self._pending_acquisitions.pop(local.id, None)
        handle = self.participants.detach_handle(local.id)
        if handle is not None:
            self._release(handle)
        self._notify()
        return local

    async def start_screen_share(self, display_name: str = SCREEN_SHARE_NAME) -> Participant:
        """Acquire a screen capture and put it on stage.

        The new participant is bound to a share id minted here, so the end of
        this share removes exactly this participant. Switches the layout to
        sidebar unless it already is.

        Raises:
            StudioError: E_RESOURCE_ACQUISITION_FAILED if the provider declined.
        """
        share_id = new_share_id()
        handle = await self._acquire(ParticipantKind.SCREEN)

        participant = self.participants.add_participant(
            ParticipantDescriptor(
                id=new_participant_id(),
                display_name=display_name,
                kind=ParticipantKind.SCREEN,
                is_local=True,
                on_stage=True,
                muted=True,
                share_id=share_id,
            )
        )
        self.participants.attach_handle(participant.id, handle)

        if self._layout != LayoutMode.SIDEBAR:
            logger.info(f"Screen share {share_id} started, switching layout to sidebar")
            self._layout = LayoutMode.SIDEBAR

        self._notify()
        return participant

    def end_screen_share(self, share_id: str) -> Participant | None:
        """Handle the capture resource signalling the end of a share.

        Unknown or already-ended shares are ignored.
        """
        participant = self.participants.find_by_share(share_id)
        if participant is None:
            logger.debug(f"Screen share {share_id} already ended, skipping")
            return None
        logger.info(f"Screen share {share_id} ended, removing participant {participant.id}")
        return self.remove_participant(participant.id)

    def stop_screen_share(self, participant_id: str) -> Participant | None:
        """Operator stops a screen share by participant id."""
        participant = self.participants.get(participant_id)
        if participant.kind != ParticipantKind.SCREEN:
            raise StudioError(
                errcode=StudioErrorCode.E_INVALID_REQUEST,
                errmesg=f"Participant {participant_id} is not a screen share",
            )
        return self.remove_participant(participant_id)

    # ==================== OVERLAYS ====================

    def submit_banner(self, text: str, style: BannerStyle = BannerStyle.STATIC) -> Banner:
        banner = self.overlays.submit_banner(text, style)
        self._notify()
        return banner

    def toggle_banner(self, banner_id: str) -> Banner:
        banner = self.overlays.toggle_active(banner_id)
        self._notify()
        return banner

    def remove_banner(self, banner_id: str) -> Banner | None:
        banner = self.overlays.remove_banner(banner_id)
        if banner is not None:
            self._notify()
        return banner

    # ==================== DESTINATIONS ====================

    def add_destination(
        self,
        platform: DestinationPlatform,
        credentials: DestinationCredentials | None = None,
        display_name: str | None = None,
    ) -> Destination:
        destination = self.destinations.add_destination(platform, credentials, display_name)
        self._notify()
        return destination

    def toggle_destination(self, destination_id: str) -> Destination:
        destination = self.destinations.toggle_enabled(destination_id)
        self._notify()
        return destination

    def set_destination_connected(self, destination_id: str, connected: bool) -> Destination:
        destination = self.destinations.set_connected(destination_id, connected)
        self._notify()
        return destination

    def remove_destination(self, destination_id: str) -> Destination:
        destination = self.destinations.remove(destination_id)
        self._notify()
        return destination
