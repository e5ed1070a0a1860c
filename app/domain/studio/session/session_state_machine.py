"""Session state machine for managing mode transitions."""

from app.schemas import SessionEvent, SessionMode


class SessionStateMachine:
    """State machine for broadcast/recording mode transitions.

    Mode flow with triggers:
    - IDLE -> RECORDING (start recording) | LIVE (go live)
    - RECORDING -> LIVE_RECORDING (go live) | IDLE (stop recording)
    - LIVE -> LIVE_RECORDING (start recording) | IDLE (stop broadcast)
    - LIVE_RECORDING -> RECORDING (stop broadcast) | LIVE (stop recording)

    Detailed effects:
    1. Leaving IDLE starts the elapsed counter.
    2. Moving between non-idle modes keeps the counter running.
    3. Entering IDLE resets the counter to 0 and finalizes the session.

    Going live is never blocked by an empty destination list; the controller
    reports that as a warning instead.
    """

    # (mode, event) -> next mode
    TRANSITIONS: dict[tuple[SessionMode, SessionEvent], SessionMode] = {
        (SessionMode.IDLE, SessionEvent.START_RECORDING): SessionMode.RECORDING,
        (SessionMode.IDLE, SessionEvent.GO_LIVE): SessionMode.LIVE,
        (SessionMode.RECORDING, SessionEvent.GO_LIVE): SessionMode.LIVE_RECORDING,
        (SessionMode.LIVE, SessionEvent.START_RECORDING): SessionMode.LIVE_RECORDING,
        (SessionMode.RECORDING, SessionEvent.STOP_RECORDING): SessionMode.IDLE,
        (SessionMode.LIVE, SessionEvent.STOP_BROADCAST): SessionMode.IDLE,
        (SessionMode.LIVE_RECORDING, SessionEvent.STOP_BROADCAST): SessionMode.RECORDING,
        (SessionMode.LIVE_RECORDING, SessionEvent.STOP_RECORDING): SessionMode.LIVE,
    }

    @classmethod
    def can_apply(cls, current: SessionMode, event: SessionEvent) -> bool:
        """Check if an event is defined for the current mode.

        Args:
            current: Current session mode
            event: Operator event

        Returns:
            True if the (mode, event) pair has a transition, False otherwise
        """
        return (current, event) in cls.TRANSITIONS

    @classmethod
    def next_mode(cls, current: SessionMode, event: SessionEvent) -> SessionMode | None:
        """Get the target mode for an event, or None if the event is undefined."""
        return cls.TRANSITIONS.get((current, event))

    @classmethod
    def finalizes(cls, current: SessionMode, event: SessionEvent) -> bool:
        """Check if applying the event ends the session (enters IDLE from a non-idle mode)."""
        return current != SessionMode.IDLE and cls.next_mode(current, event) == SessionMode.IDLE

    @classmethod
    def get_valid_events(cls, mode: SessionMode) -> set[SessionEvent]:
        """Get all events accepted in a given mode."""
        return {event for (source, event) in cls.TRANSITIONS if source == mode}

    @classmethod
    def get_valid_sources(cls, target: SessionMode) -> set[SessionMode]:
        """Get all modes that can transition to the target mode."""
        return {source for (source, _), dest in cls.TRANSITIONS.items() if dest == target}
