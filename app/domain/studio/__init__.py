"""
Studio session composition and control.

Includes:
- participant: Participant registry (stage membership, mute/video flags, media handles).
- stage: Stage compositor (layout slot assignment).
- overlay: Banner overlay scheduling.
- destination: Output destination management.
- session: Session state machine and controller.
"""
