"""HTTP surface over the cue engine."""

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from velocue.core.config import EngineConfig
from velocue.core.diff import EventChanges, TransitionState, transition_diff, upcoming_event_changes
from velocue.core.locator import CueState, cue_state
from velocue.core.resolver import EffectiveValues, effective_values
from velocue.core.session import RideSession
from velocue.core.time import format_time
from velocue.persistence.track_io import (
    TrackFormatError,
    event_to_dict,
    segment_to_dict,
    track_from_dict,
    transition_state_from_dict,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_session: Optional[RideSession] = None
_config: Optional[EngineConfig] = None


def configure_ride(session: Optional[RideSession], config: Optional[EngineConfig] = None) -> None:
    """Inject the ride session and engine config from the host app."""
    global _session, _config
    _session = session
    _config = config


def _require_session() -> RideSession:
    if _session is None:
        raise HTTPException(status_code=500, detail="RideSession not configured")
    return _session


def _require_time(payload: Dict[str, Any]) -> int:
    raw = payload.get("time")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise HTTPException(status_code=400, detail="time must be a number of seconds")
    return int(raw)


def _state_payload(state: CueState) -> Dict[str, Any]:
    return {
        "currentSegment": segment_to_dict(state.current_segment) if state.current_segment else None,
        "nextSegment": segment_to_dict(state.next_segment) if state.next_segment else None,
        "currentEvent": event_to_dict(state.current_event) if state.current_event else None,
        "nextEvent": event_to_dict(state.next_event) if state.next_event else None,
        "timeElapsed": state.time_elapsed,
        "timeRemaining": state.time_remaining,
        "progress": state.progress,
        "timeUntilNext": state.time_until_next,
        "totalDuration": state.total_duration,
        "clock": format_time(state.time_remaining),
    }


def _values_payload(values: Optional[EffectiveValues]) -> Optional[Dict[str, Any]]:
    if values is None:
        return None
    data = asdict(values)
    data["workload_line"] = values.workload_line
    return data


def _transition_state(raw: Any, key: str) -> TransitionState:
    try:
        return transition_state_from_dict(raw)
    except TrackFormatError as exc:
        raise HTTPException(status_code=400, detail=f"invalid {key} state: {exc}") from exc


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/cue")
def get_cue(payload: Dict[str, Any]):
    """Resolve what the timeline dictates for ``track`` at ``time``."""
    t = _require_time(payload)
    try:
        track = track_from_dict(payload.get("track"))
    except TrackFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    state = cue_state(track, t, _config)
    values = None
    upcoming = EventChanges()
    if state.current_segment is not None:
        values = effective_values(state.current_segment, state.current_event, track.defaults)
        upcoming = upcoming_event_changes(state.current_segment, state.next_event)
    return {
        "time": t,
        "state": _state_payload(state),
        "values": _values_payload(values),
        "upcoming": {
            "fields": sorted(upcoming.changed_fields),
            "values": asdict(upcoming),
        },
    }


@router.post("/transition")
def get_transition(payload: Dict[str, Any]):
    previous = _transition_state(payload.get("previous"), "previous")
    current = _transition_state(payload.get("current"), "current")
    changes = transition_diff(previous, current)
    return {"changed": sorted(changes.changed)}


@router.post("/ride/observe")
def observe_ride(payload: Dict[str, Any]):
    session = _require_session()
    t = _require_time(payload)
    snap = session.sample(t)
    if snap.highlighted:
        logger.info(
            "highlighting %s at %s",
            sorted(snap.highlighted),
            format_time(t),
            extra={"track_id": session.track.id, "time": t},
        )
    return {
        "time": snap.time,
        "state": _state_payload(snap.state),
        "values": _values_payload(snap.values),
        "upcoming": sorted(snap.upcoming.changed_fields),
        "highlighted": sorted(snap.highlighted),
    }


@router.post("/ride/reset")
def reset_ride():
    session = _require_session()
    session.reset()
    return {"status": "ok"}
