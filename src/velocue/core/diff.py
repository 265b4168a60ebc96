"""Attribute-level change detection.

Two different comparisons live here and should not be confused:

* ``upcoming_event_changes`` compares an event's own overrides against the
  segment it belongs to. It drives the "what's next" preview.
* ``transition_diff`` compares two fully resolved states across a segment
  change. It drives change highlighting and never looks at the cue.
"""

from dataclasses import dataclass, fields
from typing import FrozenSet, Optional

from velocue.core.resolver import EffectiveValues
from velocue.core.timeline import Position, PowerShift, Segment, SegmentEvent


@dataclass(frozen=True)
class EventChanges:
    """Overrides of an upcoming event that differ from its segment.

    A field is ``None`` when it is not changing.
    """

    cue: Optional[str] = None
    rpm_range: Optional[str] = None
    position: Optional[Position] = None
    resistance: Optional[float] = None
    power_shift: Optional[PowerShift] = None
    leaderboard: Optional[bool] = None
    light_settings: Optional[str] = None

    @property
    def changed_fields(self) -> FrozenSet[str]:
        return frozenset(f.name for f in fields(self) if getattr(self, f.name) is not None)

    @property
    def has_any(self) -> bool:
        return bool(self.changed_fields)


def upcoming_event_changes(segment: Segment, event: Optional[SegmentEvent]) -> EventChanges:
    if event is None:
        return EventChanges()

    def changed(override, baseline):
        return override if override is not None and override != baseline else None

    return EventChanges(
        # any authored cue text is worth surfacing
        cue=event.cue,
        rpm_range=changed(event.rpm_range, segment.rpm_range),
        position=changed(event.position, segment.position),
        resistance=changed(event.resistance, 0.0 if segment.resistance is None else segment.resistance),
        power_shift=changed(event.power_shift, segment.power_shift),
        leaderboard=changed(event.leaderboard, True if segment.leaderboard is None else segment.leaderboard),
        light_settings=changed(event.light_settings, segment.light_settings or ""),
    )


@dataclass(frozen=True)
class TransitionState:
    """The resolved attributes compared across a segment change."""

    position: Position
    rpm_range: str
    resistance: Optional[float]
    power_shift: PowerShift
    leaderboard: bool
    light_settings: Optional[str]

    @classmethod
    def from_values(cls, values: EffectiveValues) -> "TransitionState":
        return cls(
            position=values.position,
            rpm_range=values.rpm_range,
            resistance=values.resistance,
            power_shift=values.power_shift,
            leaderboard=values.leaderboard,
            light_settings=values.light_settings,
        )


TRANSITION_FIELDS = tuple(f.name for f in fields(TransitionState))


@dataclass(frozen=True)
class TransitionChanges:
    changed: FrozenSet[str]
    previous: TransitionState
    current: TransitionState

    @property
    def has_any(self) -> bool:
        return bool(self.changed)


def transition_diff(previous: TransitionState, current: TransitionState) -> TransitionChanges:
    changed = frozenset(
        name for name in TRANSITION_FIELDS if getattr(previous, name) != getattr(current, name)
    )
    return TransitionChanges(changed=changed, previous=previous, current=current)
