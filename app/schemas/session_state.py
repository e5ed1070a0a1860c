"""Common enums used across schemas."""

from enum import Enum


class SessionMode(str, Enum):
    """Broadcast session modes.

    Mode Transition Flow:

    IDLE ⇄ LIVE ⇄ LIVE_RECORDING ⇄ RECORDING ⇄ IDLE

    go live / stop broadcast toggle the LIVE half,
    start recording / stop recording toggle the RECORDING half.

    Mode Descriptions:
    - IDLE: Nothing is broadcast or recorded. Elapsed counter is 0.
    - LIVE: Broadcasting to the enabled destinations.
    - RECORDING: Recording locally, not broadcasting.
    - LIVE_RECORDING: Broadcasting and recording at the same time.

    Returning to IDLE resets the elapsed counter and finalizes the session.
    """

    IDLE = "idle"
    LIVE = "live"
    RECORDING = "recording"
    LIVE_RECORDING = "live_recording"

    def __str__(self) -> str:
        return self.value

    @property
    def is_live(self) -> bool:
        return self in (SessionMode.LIVE, SessionMode.LIVE_RECORDING)

    @property
    def is_recording(self) -> bool:
        return self in (SessionMode.RECORDING, SessionMode.LIVE_RECORDING)


class SessionEvent(str, Enum):
    """Operator events accepted by the session state machine."""

    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    GO_LIVE = "go_live"
    STOP_BROADCAST = "stop_broadcast"

    def __str__(self) -> str:
        return self.value


__all__ = ["SessionEvent", "SessionMode"]
