"""Effective attribute values after applying the override chains.

Each attribute resolves through a fixed chain, first present value wins:

    cue, rpm_range, position, resistance, power_shift   event -> segment
    leaderboard, light_settings, cue_font_size,
    cue_pulsing                                         event -> segment -> track

``light_settings`` treats empty text as absent at every level.
"""

from dataclasses import dataclass
from typing import Optional, TypeVar

from velocue.core.timeline import (
    CueFontSize,
    Position,
    PowerShift,
    Segment,
    SegmentEvent,
    Track,
    TrackDefaults,
)

T = TypeVar("T")


def resolve(*chain: Optional[T]) -> Optional[T]:
    """Return the first value in ``chain`` that is not ``None``."""
    for value in chain:
        if value is not None:
            return value
    return None


def _non_empty(text: Optional[str]) -> Optional[str]:
    return text if text else None


@dataclass(frozen=True)
class EffectiveValues:
    cue: Optional[str]
    rpm_range: str
    position: Position
    resistance: Optional[float]  # None renders as base
    power_shift: PowerShift
    leaderboard: bool
    light_settings: Optional[str]
    cue_font_size: CueFontSize
    cue_pulsing: bool

    @property
    def workload_line(self) -> str:
        return format_workload_line(self.rpm_range, self.resistance, self.power_shift)


def effective_values(
    segment: Segment,
    event: Optional[SegmentEvent] = None,
    defaults: Optional[TrackDefaults] = None,
) -> EffectiveValues:
    """Resolve every overridable attribute for a (segment, event) pair.

    No selection happens here; the pair is trusted as given.
    """
    defaults = defaults or TrackDefaults()

    def ev(name: str):
        return getattr(event, name) if event is not None else None

    return EffectiveValues(
        cue=resolve(ev("cue"), segment.cue),
        rpm_range=resolve(ev("rpm_range"), segment.rpm_range),
        position=resolve(ev("position"), segment.position),
        resistance=resolve(ev("resistance"), segment.resistance),
        power_shift=resolve(ev("power_shift"), segment.power_shift),
        leaderboard=resolve(ev("leaderboard"), segment.leaderboard, defaults.leaderboard),
        light_settings=resolve(
            _non_empty(ev("light_settings")),
            _non_empty(segment.light_settings),
            _non_empty(defaults.light_settings),
        ),
        cue_font_size=resolve(ev("cue_font_size"), segment.cue_font_size, defaults.cue_font_size),
        cue_pulsing=resolve(ev("cue_pulsing"), segment.cue_pulsing, defaults.cue_pulsing),
    )


def preview_first_segment(track: Track) -> Optional[EffectiveValues]:
    """Values shown when previewing a linked track before it starts."""
    if not track.segments:
        return None
    return effective_values(track.segments[0], None, track.defaults)


def format_resistance(value: Optional[float]) -> str:
    """``B`` for base, ``B+X`` above base with trailing zero decimals trimmed."""
    if value is None:
        return ""
    if value == 0:
        return "B"
    if float(value).is_integer():
        return f"B+{int(value)}"
    return f"B+{value}"


def format_workload_line(rpm_range: str, resistance: Optional[float], power_shift: PowerShift) -> str:
    # all three parts always render, even at their defaults
    resistance_text = format_resistance(resistance) if resistance is not None else "B"
    return f"{rpm_range} / {resistance_text} / {power_shift.value}"
