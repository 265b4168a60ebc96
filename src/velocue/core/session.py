"""Caller-held memory for change highlighting during a ride.

The engine functions are pure; the only thing that survives between
samples is what a ``RideSession`` remembers: the last resolved state of the
outgoing segment and the highlight it started. That state has to outlive
gaps where no segment is current, otherwise the outgoing values are lost.
"""

import logging
import threading
from dataclasses import dataclass
from typing import FrozenSet, Optional

from velocue.core.config import DEFAULT_CONFIG, EngineConfig
from velocue.core.diff import (
    EventChanges,
    TransitionState,
    transition_diff,
    upcoming_event_changes,
)
from velocue.core.locator import CueState, cue_state
from velocue.core.resolver import EffectiveValues, effective_values
from velocue.core.timeline import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RideSnapshot:
    time: int
    state: CueState
    values: Optional[EffectiveValues]  # None when no segment is current
    upcoming: EventChanges
    highlighted: FrozenSet[str]


class RideSession:
    """Tracks segment transitions for one track across playback samples."""

    def __init__(self, track: Track, config: Optional[EngineConfig] = None):
        self.track = track
        self.config = config or DEFAULT_CONFIG
        self._lock = threading.Lock()
        self._previous: Optional[TransitionState] = None
        self._segment_id: Optional[str] = None
        self._changed: FrozenSet[str] = frozenset()
        self._highlight_until: Optional[float] = None

    @property
    def previous_state(self) -> Optional[TransitionState]:
        with self._lock:
            return self._previous

    def reset(self) -> None:
        with self._lock:
            self._previous = None
            self._segment_id = None
            self._changed = frozenset()
            self._highlight_until = None

    def observe(self, state: CueState, now: int) -> FrozenSet[str]:
        """Feed one locator result; returns the fields to highlight at ``now``."""
        with self._lock:
            current = state.current_segment
            if current is None:
                # gap between segments: keep everything for the next one
                return self._highlighted(now)

            values = effective_values(current, state.current_event, self.track.defaults)
            snapshot = TransitionState.from_values(values)

            if current.id != self._segment_id:
                self._enter_segment(snapshot, state, now)
                self._segment_id = current.id

            self._previous = snapshot
            return self._highlighted(now)

    def highlighted_fields(self, now: int) -> FrozenSet[str]:
        with self._lock:
            return self._highlighted(now)

    def sample(self, t: int) -> RideSnapshot:
        """Locate, resolve and diff in one step for playback time ``t``."""
        state = cue_state(self.track, t, self.config)
        highlighted = self.observe(state, t)
        values = None
        upcoming = EventChanges()
        if state.current_segment is not None:
            values = effective_values(state.current_segment, state.current_event, self.track.defaults)
            upcoming = upcoming_event_changes(state.current_segment, state.next_event)
        return RideSnapshot(time=t, state=state, values=values, upcoming=upcoming, highlighted=highlighted)

    def _enter_segment(self, snapshot: TransitionState, state: CueState, now: int) -> None:
        if self._previous is None:
            # first segment of the ride has nothing to compare against
            self._changed = frozenset()
            self._highlight_until = None
            return

        changes = transition_diff(self._previous, snapshot)
        self._changed = changes.changed
        if changes.has_any:
            duration = min(state.time_remaining, self.config.max_pulse_seconds)
            self._highlight_until = now + duration
            logger.debug(
                "segment %s changed %s, highlighting %.1fs",
                state.current_segment.label,
                sorted(changes.changed),
                duration,
                extra={"track_id": self.track.id, "segment_id": state.current_segment.id, "time": now},
            )
        else:
            self._highlight_until = None

    def _highlighted(self, now: int) -> FrozenSet[str]:
        if self._highlight_until is None or now >= self._highlight_until:
            return frozenset()
        return self._changed
