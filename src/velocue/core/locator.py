"""Locate the active segment and event for a playback time."""

from dataclasses import dataclass
from typing import Optional, Sequence

from velocue.core.config import DEFAULT_CONFIG, EngineConfig
from velocue.core.timeline import Segment, SegmentEvent, Track


@dataclass(frozen=True)
class CueState:
    current_segment: Optional[Segment]
    next_segment: Optional[Segment]
    current_event: Optional[SegmentEvent]
    next_event: Optional[SegmentEvent]
    time_elapsed: int  # seconds into current segment
    time_remaining: int  # seconds left in current segment
    progress: float  # 0.0 - 1.0
    time_until_next: Optional[int]  # seconds until next event or segment
    total_duration: int


def _is_current(segment: Segment, t: int, lookahead: int) -> bool:
    if segment.start_time <= t < segment.end_time:
        return True
    # shown slightly early so adjacent segments never flash "nothing active"
    return 0 <= segment.start_time - t <= lookahead


def locate(segments: Sequence[Segment], t: int, config: Optional[EngineConfig] = None) -> CueState:
    """Compute the cue state at playback time ``t`` (seconds).

    ``segments`` must be ordered by start time. Degenerate input (no
    segments, negative time, zero-length segments) yields empty/zero
    results rather than an error.
    """
    cfg = config or DEFAULT_CONFIG
    t = int(t)
    lookahead = cfg.lookahead_seconds

    current = next((seg for seg in segments if _is_current(seg, t, lookahead)), None)
    upcoming = next((seg for seg in segments if seg.start_time > t + lookahead), None)

    time_elapsed = 0
    time_remaining = 0
    progress = 0.0
    current_event: Optional[SegmentEvent] = None
    next_event: Optional[SegmentEvent] = None

    if current is not None:
        effective_t = max(t, current.start_time)
        time_elapsed = effective_t - current.start_time
        time_remaining = current.end_time - effective_t
        duration = current.duration
        progress = time_elapsed / duration if duration > 0 else 0.0

        for ev in current.events:
            if ev.offset <= time_elapsed:
                current_event = ev
            elif next_event is None:
                next_event = ev

    if current is not None and next_event is not None:
        time_until_next: Optional[int] = current.start_time + next_event.offset - t
    elif upcoming is not None:
        time_until_next = upcoming.start_time - t
    else:
        time_until_next = None

    return CueState(
        current_segment=current,
        next_segment=upcoming,
        current_event=current_event,
        next_event=next_event,
        time_elapsed=time_elapsed,
        time_remaining=time_remaining,
        progress=progress,
        time_until_next=time_until_next,
        total_duration=segments[-1].end_time if segments else 0,
    )


def cue_state(track: Track, t: int, config: Optional[EngineConfig] = None) -> CueState:
    return locate(track.segments, t, config)


def next_segment_seek(state: CueState) -> Optional[int]:
    return state.next_segment.start_time if state.next_segment else None


def previous_segment_seek(track: Track, state: CueState) -> Optional[int]:
    """Seek target for "previous segment" navigation."""
    current = state.current_segment
    if current is None:
        return track.segments[0].start_time if track.segments else None
    previous = None
    for seg in track.segments:
        if seg.end_time <= current.start_time:
            previous = seg
    return previous.start_time if previous else 0


def step_seek(t: int, seconds: int = 5) -> int:
    """Step forward (positive) or backward (negative), never before 0."""
    return max(0, t + seconds)
