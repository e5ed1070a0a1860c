"""Tests for SessionController: mode transitions, capture and change notification."""

import asyncio
from typing import Any

import pytest

from app.domain.studio.session.session_controller import (
    LOCAL_CAMERA_ID,
    WARNING_NO_ENABLED_DESTINATIONS,
    SessionController,
)
from app.schemas import (
    DestinationPlatform,
    LayoutMode,
    ParticipantDescriptor,
    ParticipantKind,
    Resolution,
    SessionMode,
    SessionViewModel,
    SlotRole,
    StudioSettingsUpdate,
)
from app.services.integrations.broadcast_transport import LoggingBroadcastTransport
from app.services.integrations.capture_service import StubCaptureProvider
from app.utils.studio_errors import StudioError, StudioErrorCode


class GatedCaptureProvider(StubCaptureProvider):
    """Capture provider whose acquisitions block until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()

    async def acquire(self, kind: ParticipantKind) -> Any:
        await self.gate.wait()
        return await super().acquire(kind)


class FailingTransport:
    def finalize_session(self, summary) -> str:
        raise RuntimeError("upload pipeline unavailable")


class BrokenCaptureProvider:
    async def acquire(self, kind: ParticipantKind) -> Any:
        raise RuntimeError("device busy")

    def release(self, handle: Any) -> None:
        return None


class CountingTransport:
    """Transport implementing only the protocol: a plain finalize_session."""

    def __init__(self) -> None:
        self.calls = 0

    def finalize_session(self, summary) -> str:
        self.calls += 1
        return f"export-{self.calls}"


class TrackingCaptureProvider:
    """Provider implementing only the protocol: async acquire, plain release."""

    def __init__(self) -> None:
        self.released: list[Any] = []

    async def acquire(self, kind: ParticipantKind) -> Any:
        return object()

    def release(self, handle: Any) -> None:
        self.released.append(handle)


class TestSeedDefaults:
    """Tests for the initial studio state."""

    def test_seeded_local_camera_and_banners(self, controller: SessionController):
        """A new studio has the host camera on stage and the welcome banner showing."""
        view_model = controller.get_view_model()

        assert view_model.session_mode == SessionMode.IDLE
        assert view_model.elapsed_display == "00:00"
        assert [p.id for p in view_model.participants] == [LOCAL_CAMERA_ID]
        assert view_model.layout == LayoutMode.GRID
        assert len(view_model.slots) == 1
        assert len(view_model.banners) == 2
        assert view_model.active_banner.text == "Welcome to Founder Storys Studio!"
        assert view_model.warnings == []

    def test_no_seed(self, empty_controller: SessionController):
        view_model = empty_controller.get_view_model()

        assert view_model.participants == []
        assert view_model.slots == []
        assert view_model.active_banner is None


class TestModeTransitions:
    """Tests for SessionController.apply_event and mode shortcuts."""

    def test_go_live_then_stop_resets_and_finalizes_once(
        self,
        controller: SessionController,
        transport: LoggingBroadcastTransport,
    ):
        """Idle -> live -> idle resets the counter and finalizes exactly once."""
        # Arrange
        controller.go_live()
        controller.tick(5)

        # Act
        controller.stop_broadcast()

        # Assert
        assert controller.mode == SessionMode.IDLE
        assert controller.elapsed_seconds == 0
        assert len(transport.finalized) == 1
        assert transport.finalized[0].final_mode == SessionMode.LIVE
        assert transport.finalized[0].elapsed_seconds == 5
        assert controller.last_artifact_ref is not None

    def test_live_recording_round_trip(
        self,
        controller: SessionController,
        transport: LoggingBroadcastTransport,
    ):
        """Moving between non-idle modes keeps the counter and does not finalize."""
        controller.go_live()
        controller.tick(2)
        controller.start_recording()
        controller.tick(3)
        controller.stop_broadcast()

        assert controller.mode == SessionMode.RECORDING
        assert controller.elapsed_seconds == 5
        assert transport.finalized == []

        controller.stop_recording()

        assert controller.mode == SessionMode.IDLE
        assert len(transport.finalized) == 1
        assert transport.finalized[0].was_recording is True
        assert transport.finalized[0].was_live is True

    def test_invalid_transition_has_no_side_effects(
        self,
        controller: SessionController,
        transport: LoggingBroadcastTransport,
    ):
        """Rejected events leave state untouched and notify nobody."""
        # Arrange
        calls: list[SessionViewModel] = []
        controller.start_recording()
        controller.tick(4)
        controller.subscribe(calls.append)

        # Act
        with pytest.raises(StudioError) as exc_info:
            controller.start_recording()

        # Assert
        assert exc_info.value.code == StudioErrorCode.E_INVALID_TRANSITION
        assert exc_info.value.status_code == 409
        assert controller.mode == SessionMode.RECORDING
        assert controller.elapsed_seconds == 4
        assert calls == []
        assert transport.finalized == []

    def test_stop_while_idle_rejected(self, controller: SessionController):
        with pytest.raises(StudioError):
            controller.stop_broadcast()
        with pytest.raises(StudioError):
            controller.stop_recording()

    def test_toggle_buttons(self, controller: SessionController):
        """Single buttons flip their half of the mode."""
        assert controller.toggle_live() == SessionMode.LIVE
        assert controller.toggle_recording() == SessionMode.LIVE_RECORDING
        assert controller.toggle_live() == SessionMode.RECORDING
        assert controller.toggle_recording() == SessionMode.IDLE

    def test_finalize_failure_still_reaches_idle(self):
        """A transport failure is logged; the session still ends."""
        controller = SessionController(capture=StubCaptureProvider(), transport=FailingTransport())
        controller.go_live()

        controller.stop_broadcast()

        assert controller.mode == SessionMode.IDLE
        assert controller.last_artifact_ref is None

    def test_summary_covers_whole_session(
        self,
        controller: SessionController,
        transport: LoggingBroadcastTransport,
    ):
        """A session that broadcast earlier is finalized as live with its destinations."""
        # Arrange
        youtube = controller.add_destination(DestinationPlatform.YOUTUBE)
        controller.go_live()
        controller.start_recording()
        controller.stop_broadcast()
        controller.toggle_destination(youtube.id)

        # Act
        controller.stop_recording()

        # Assert
        summary = transport.finalized[0]
        assert summary.final_mode == SessionMode.RECORDING
        assert summary.was_live is True
        assert summary.was_recording is True
        assert summary.destination_ids == [youtube.id]

    def test_summary_reset_between_sessions(
        self,
        controller: SessionController,
        transport: LoggingBroadcastTransport,
    ):
        """Activity from a finished session does not leak into the next one."""
        controller.add_destination(DestinationPlatform.YOUTUBE)
        controller.go_live()
        controller.stop_broadcast()

        controller.start_recording()
        controller.stop_recording()

        second = transport.finalized[1]
        assert second.was_live is False
        assert second.was_recording is True
        assert second.destination_ids == []


class TestCollaboratorContract:
    """Tests with collaborators written only against the capture and transport protocols."""

    def test_finalize_invoked_once_and_reference_kept(self):
        """Going live then stopping calls finalize_session once and keeps its reference."""
        # Arrange
        transport = CountingTransport()
        controller = SessionController(capture=TrackingCaptureProvider(), transport=transport)
        controller.go_live()

        # Act
        controller.stop_broadcast()

        # Assert
        assert transport.calls == 1
        assert controller.last_artifact_ref == "export-1"

    async def test_screen_share_end_releases_handle(self):
        """Ending a share hands its capture resource back before returning."""
        # Arrange
        capture = TrackingCaptureProvider()
        controller = SessionController(capture=capture, transport=CountingTransport())
        share = await controller.start_screen_share()
        handle = share.media_handle

        # Act
        controller.end_screen_share(share.share_id)

        # Assert
        assert capture.released == [handle]

    async def test_stop_local_camera_releases_handle(self):
        capture = TrackingCaptureProvider()
        controller = SessionController(capture=capture, transport=CountingTransport())
        participant = await controller.start_local_camera()
        handle = participant.media_handle

        controller.stop_local_camera()

        assert capture.released == [handle]


class TestTick:
    """Tests for SessionController.tick."""

    def test_tick_ignored_while_idle(self, controller: SessionController):
        assert controller.tick(10) == 0

    def test_tick_accumulates(self, controller: SessionController):
        controller.start_recording()

        controller.tick()
        controller.tick(64)

        assert controller.elapsed_seconds == 65
        assert controller.get_view_model().elapsed_display == "01:05"

    def test_negative_tick_rejected(self, controller: SessionController):
        controller.go_live()

        with pytest.raises(StudioError) as exc_info:
            controller.tick(-1)

        assert exc_info.value.code == StudioErrorCode.E_INVALID_REQUEST
        assert controller.elapsed_seconds == 0


class TestBroadcastDestinations:
    """Tests for the destination snapshot taken on go-live."""

    def test_warning_when_live_without_destinations(self, controller: SessionController):
        """Going live with nothing enabled is allowed and reported as a warning."""
        controller.go_live()

        view_model = controller.get_view_model()

        assert view_model.session_mode == SessionMode.LIVE
        assert view_model.warnings == [WARNING_NO_ENABLED_DESTINATIONS]

    def test_no_warning_when_recording_only(self, controller: SessionController):
        controller.start_recording()
        assert controller.warnings() == []

    def test_snapshot_unchanged_by_live_mutation(self, controller: SessionController):
        """Destination changes during a broadcast only apply to the next go-live."""
        # Arrange
        youtube = controller.add_destination(DestinationPlatform.YOUTUBE)
        controller.go_live()

        # Act
        controller.toggle_destination(youtube.id)
        twitch = controller.add_destination(DestinationPlatform.TWITCH)

        # Assert
        assert [d.id for d in controller.broadcast_destinations] == [youtube.id]
        assert controller.warnings() == []

        controller.stop_broadcast()
        controller.go_live()
        assert [d.id for d in controller.broadcast_destinations] == [twitch.id]

    def test_snapshot_cleared_when_broadcast_stops(self, controller: SessionController):
        controller.add_destination(DestinationPlatform.YOUTUBE)
        controller.go_live()
        controller.start_recording()

        controller.stop_broadcast()

        assert controller.broadcast_destinations == []


class TestChangeNotification:
    """Tests for SessionController.subscribe."""

    def test_listener_called_after_mutation(self, controller: SessionController):
        calls: list[SessionViewModel] = []
        controller.subscribe(calls.append)

        controller.go_live()
        controller.set_layout(LayoutMode.SPOTLIGHT)

        assert [vm.session_mode for vm in calls] == [SessionMode.LIVE, SessionMode.LIVE]
        assert calls[-1].layout == LayoutMode.SPOTLIGHT

    def test_unsubscribe(self, controller: SessionController):
        calls: list[SessionViewModel] = []
        unsubscribe = controller.subscribe(calls.append)

        unsubscribe()
        controller.go_live()

        assert calls == []

    def test_failing_listener_does_not_break_mutation(self, controller: SessionController):
        """A listener that raises is logged; other listeners still run."""
        calls: list[SessionViewModel] = []

        def broken(view_model: SessionViewModel) -> None:
            raise ValueError("render failed")

        controller.subscribe(broken)
        controller.subscribe(calls.append)

        controller.submit_banner("Hello")

        assert len(calls) == 1
        assert calls[0].active_banner.text == "Hello"

    def test_view_model_is_a_copy(self, controller: SessionController):
        """Mutating the view model does not change controller state."""
        view_model = controller.get_view_model()

        view_model.participants[0].on_stage = False

        assert controller.participants.get(LOCAL_CAMERA_ID).on_stage is True


class TestParticipants:
    """Tests for participant intents."""

    def test_join_guest_and_grid_columns(self, controller: SessionController):
        controller.join_guest("Guest One", on_stage=True)
        controller.join_guest("Guest Two", on_stage=False)

        view_model = controller.get_view_model()

        assert len(view_model.participants) == 3
        assert len(view_model.slots) == 2
        assert view_model.columns == 2

    def test_stage_scenario_grid_then_sidebar(self, empty_controller: SessionController):
        """Empty grid, one camera on stage, then sidebar with no secondaries."""
        assert empty_controller.get_view_model().slots == []

        empty_controller.add_participant(
            ParticipantDescriptor(id="cam-1", display_name="Cam", on_stage=False)
        )
        empty_controller.set_stage_membership("cam-1", True)
        assert len(empty_controller.get_view_model().slots) == 1

        empty_controller.set_layout(LayoutMode.SIDEBAR)
        view_model = empty_controller.get_view_model()
        assert [s.role for s in view_model.slots] == [SlotRole.PRIMARY]
        assert view_model.slots[0].participant.id == "cam-1"

    def test_toggle_local_mute_and_video(self, controller: SessionController):
        assert controller.toggle_local_mute().muted is True
        assert controller.toggle_local_video().video_suppressed is True
        assert controller.toggle_local_mute().muted is False

    def test_local_toggles_without_local_camera(self, empty_controller: SessionController):
        with pytest.raises(StudioError) as exc_info:
            empty_controller.toggle_local_mute()
        assert exc_info.value.code == StudioErrorCode.E_NOT_FOUND

    async def test_remove_participant_releases_handle(
        self,
        controller: SessionController,
        capture: StubCaptureProvider,
    ):
        """Removal gives the capture handle back; a second removal is a no-op."""
        await controller.start_local_camera()

        removed = controller.remove_participant(LOCAL_CAMERA_ID)

        assert removed is not None
        assert controller.remove_participant(LOCAL_CAMERA_ID) is None
        assert capture.live_handles == {}
        assert len(capture.released) == 1

    def test_update_settings_partial(self, controller: SessionController):
        settings = controller.update_settings(StudioSettingsUpdate(resolution=Resolution.UHD))

        assert settings.resolution == Resolution.UHD
        assert settings.show_names is True
        assert controller.get_view_model().settings.resolution == Resolution.UHD


class TestLocalCamera:
    """Tests for local camera acquisition."""

    async def test_start_local_camera_attaches_handle(
        self,
        controller: SessionController,
        capture: StubCaptureProvider,
    ):
        participant = await controller.start_local_camera()

        assert participant.has_media is True
        assert len(capture.live_handles) == 1

    async def test_restart_releases_previous_handle(
        self,
        controller: SessionController,
        capture: StubCaptureProvider,
    ):
        await controller.start_local_camera()
        await controller.start_local_camera()

        assert len(capture.live_handles) == 1
        assert len(capture.released) == 1

    async def test_stop_local_camera(self, controller: SessionController, capture: StubCaptureProvider):
        await controller.start_local_camera()

        participant = controller.stop_local_camera()

        assert participant.has_media is False
        assert LOCAL_CAMERA_ID in controller.participants
        assert capture.live_handles == {}

    async def test_denied_camera_leaves_state(self):
        controller = SessionController(
            capture=StubCaptureProvider(deny=True),
            transport=LoggingBroadcastTransport(),
        )

        with pytest.raises(StudioError) as exc_info:
            await controller.start_local_camera()

        assert exc_info.value.code == StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED
        assert controller.participants.get(LOCAL_CAMERA_ID).has_media is False

    async def test_acquisition_discarded_after_removal(self):
        """A camera removed while its acquisition is pending releases the late handle."""
        # Arrange
        capture = GatedCaptureProvider()
        controller = SessionController(capture=capture, transport=LoggingBroadcastTransport())
        task = asyncio.create_task(controller.start_local_camera())
        await asyncio.sleep(0)

        # Act
        controller.remove_participant(LOCAL_CAMERA_ID)
        capture.gate.set()
        result = await task

        # Assert
        assert result is None
        assert capture.live_handles == {}
        assert len(capture.released) == 1
        assert LOCAL_CAMERA_ID not in controller.participants

    async def test_superseded_acquisition_discarded(self):
        """Only the newest pending acquisition attaches its handle."""
        capture = GatedCaptureProvider()
        controller = SessionController(capture=capture, transport=LoggingBroadcastTransport())
        first = asyncio.create_task(controller.start_local_camera())
        await asyncio.sleep(0)
        second = asyncio.create_task(controller.start_local_camera())
        await asyncio.sleep(0)

        capture.gate.set()
        first_result, second_result = await asyncio.gather(first, second)

        assert first_result is None
        assert second_result is not None
        assert len(capture.live_handles) == 1
        assert len(capture.released) == 1
        assert controller.participants.get(LOCAL_CAMERA_ID).media_handle.handle_id in capture.live_handles


class TestScreenShare:
    """Tests for screen share start and end."""

    async def test_start_screen_share_switches_to_sidebar(self, controller: SessionController):
        """The share goes on stage muted and takes the primary slot."""
        # Act
        share = await controller.start_screen_share()

        # Assert
        assert share.kind == ParticipantKind.SCREEN
        assert share.display_name == "Presentation"
        assert share.on_stage is True
        assert share.muted is True
        assert share.share_id is not None

        view_model = controller.get_view_model()
        assert view_model.layout == LayoutMode.SIDEBAR
        assert view_model.slots[0].participant.id == share.id
        assert view_model.slots[0].role == SlotRole.PRIMARY
        assert view_model.slots[1].participant.id == LOCAL_CAMERA_ID

    async def test_end_screen_share_removes_matching_share_only(
        self,
        controller: SessionController,
        capture: StubCaptureProvider,
    ):
        first = await controller.start_screen_share()
        second = await controller.start_screen_share("Slides")

        removed = controller.end_screen_share(first.share_id)

        assert removed.id == first.id
        assert first.id not in controller.participants
        assert second.id in controller.participants
        assert len(capture.released) == 1

    async def test_end_unknown_share_is_noop(self, controller: SessionController):
        share = await controller.start_screen_share()
        controller.end_screen_share(share.share_id)

        assert controller.end_screen_share(share.share_id) is None
        assert controller.end_screen_share("sh_unknown") is None

    async def test_denied_screen_share_changes_nothing(self):
        controller = SessionController(
            capture=StubCaptureProvider(deny=True),
            transport=LoggingBroadcastTransport(),
        )

        with pytest.raises(StudioError) as exc_info:
            await controller.start_screen_share()

        assert exc_info.value.code == StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED
        assert exc_info.value.status_code == 503
        assert len(controller.participants) == 1
        assert controller.layout == LayoutMode.GRID

    async def test_provider_error_wrapped(self):
        """Arbitrary provider failures surface as E_RESOURCE_ACQUISITION_FAILED."""
        controller = SessionController(
            capture=BrokenCaptureProvider(),
            transport=LoggingBroadcastTransport(),
        )

        with pytest.raises(StudioError) as exc_info:
            await controller.start_screen_share()

        assert exc_info.value.code == StudioErrorCode.E_RESOURCE_ACQUISITION_FAILED
        assert "device busy" in exc_info.value.errmesg

    async def test_stop_screen_share_rejects_camera(self, controller: SessionController):
        with pytest.raises(StudioError) as exc_info:
            controller.stop_screen_share(LOCAL_CAMERA_ID)

        assert exc_info.value.code == StudioErrorCode.E_INVALID_REQUEST
        assert LOCAL_CAMERA_ID in controller.participants

    async def test_stop_screen_share(self, controller: SessionController, capture: StubCaptureProvider):
        share = await controller.start_screen_share()

        controller.stop_screen_share(share.id)

        assert share.id not in controller.participants
        assert capture.live_handles == {}
