"""Stage compositor deriving visual slots from on-stage participants."""

from collections.abc import Iterable

from app.schemas import Composition, LayoutMode, Participant, ParticipantKind, SlotRole, StageSlot


class StageCompositor:
    """Pure arrangement of on-stage participants for a layout.

    Ordering rule, applied before slot assignment:
    - screen shares sort before cameras
    - ties keep insertion order (stable sort)

    Slot assignment:
    - GRID: every participant gets a CELL; columns are 1 for one participant,
      2 for two to four, 3 for five or more
    - SIDEBAR: first participant is PRIMARY, the rest are SECONDARY
    - SPOTLIGHT / SOLO: only the first participant, as PRIMARY. Others stay on
      stage and reappear when the layout changes back.
    """

    @staticmethod
    def _kind_rank(participant: Participant) -> int:
        return 0 if participant.kind == ParticipantKind.SCREEN else 1

    @classmethod
    def order(cls, participants: Iterable[Participant]) -> list[Participant]:
        """Filter to on-stage participants and apply the stage ordering rule."""
        on_stage = [p for p in participants if p.on_stage]
        return sorted(on_stage, key=cls._kind_rank)

    @classmethod
    def grid_columns(cls, count: int) -> int | None:
        if count <= 0:
            return None
        if count == 1:
            return 1
        if count <= 4:
            return 2
        return 3

    @classmethod
    def compose(cls, participants: Iterable[Participant], layout: LayoutMode) -> Composition:
        """Compose the stage. Never fails; an empty stage gives no slots."""
        ordered = cls.order(participants)
        if not ordered:
            return Composition(layout=layout)

        if layout == LayoutMode.GRID:
            return Composition(
                layout=layout,
                slots=[StageSlot(participant=p, role=SlotRole.CELL) for p in ordered],
                columns=cls.grid_columns(len(ordered)),
            )

        if layout == LayoutMode.SIDEBAR:
            first, *rest = ordered
            slots = [StageSlot(participant=first, role=SlotRole.PRIMARY)]
            slots.extend(StageSlot(participant=p, role=SlotRole.SECONDARY) for p in rest)
            return Composition(layout=layout, slots=slots)

        # SPOTLIGHT / SOLO
        return Composition(
            layout=layout,
            slots=[StageSlot(participant=ordered[0], role=SlotRole.PRIMARY)],
        )
