"""Plain-record codec for tracks.

Records use the camelCase keys of the exchanged JSON. Absent optional
fields are written as ``null`` and ``null`` reads back as absent, so every
optional field round-trips.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from velocue.core.diff import TransitionState
from velocue.core.timeline import (
    CueFontSize,
    Position,
    PowerShift,
    Segment,
    SegmentEvent,
    Track,
    TrackType,
    Workout,
    new_id,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")


class TrackFormatError(ValueError):
    """Raised when a record cannot be decoded into the timeline model."""


def _require(d: Dict, key: str, kind: str) -> Any:
    if not isinstance(d, dict):
        raise TrackFormatError(f"{kind} record must be an object, got {type(d).__name__}")
    if d.get(key) is None:
        raise TrackFormatError(f"{kind} record is missing '{key}'")
    return d[key]


def _enum(enum_cls: Type[E], raw: Any, key: str) -> Optional[E]:
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except (TypeError, ValueError):
        raise TrackFormatError(f"unknown {key} value: {raw!r}") from None


def _int(raw: Any, key: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TrackFormatError(f"'{key}' must be a number, got {raw!r}")
    return int(raw)


def _float(raw: Any, key: str) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TrackFormatError(f"'{key}' must be a number, got {raw!r}")
    return float(raw)


def _bool(raw: Any, key: str) -> Optional[bool]:
    if raw is None:
        return None
    if not isinstance(raw, bool):
        raise TrackFormatError(f"'{key}' must be true, false or null, got {raw!r}")
    return raw


def _text(raw: Any, key: str) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise TrackFormatError(f"'{key}' must be text, got {raw!r}")
    return raw


def _list(raw: Any, key: str) -> List:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TrackFormatError(f"'{key}' must be a list, got {type(raw).__name__}")
    return raw


def _value(e: Any) -> Any:
    return e.value if e is not None else None


def event_from_dict(d: Dict) -> SegmentEvent:
    offset = _require(d, "offset", "event")
    return SegmentEvent(
        id=_text(d.get("id"), "id") or new_id(),
        offset=_int(offset, "offset"),
        cue=_text(d.get("cue"), "cue"),
        rpm_range=_text(d.get("rpmRange"), "rpmRange"),
        position=_enum(Position, d.get("position"), "position"),
        resistance=_float(d.get("resistance"), "resistance"),
        power_shift=_enum(PowerShift, d.get("powerShift"), "powerShift"),
        leaderboard=_bool(d.get("leaderboard"), "leaderboard"),
        light_settings=_text(d.get("lightSettings"), "lightSettings"),
        cue_font_size=_enum(CueFontSize, d.get("cueFontSize"), "cueFontSize"),
        cue_pulsing=_bool(d.get("cuePulsing"), "cuePulsing"),
    )


def event_to_dict(ev: SegmentEvent) -> Dict:
    return {
        "id": ev.id,
        "offset": ev.offset,
        "cue": ev.cue,
        "rpmRange": ev.rpm_range,
        "position": _value(ev.position),
        "resistance": ev.resistance,
        "powerShift": _value(ev.power_shift),
        "leaderboard": ev.leaderboard,
        "lightSettings": ev.light_settings,
        "cueFontSize": _value(ev.cue_font_size),
        "cuePulsing": ev.cue_pulsing,
    }


def segment_from_dict(d: Dict) -> Segment:
    start = _int(_require(d, "startTime", "segment"), "startTime")
    end = _int(_require(d, "endTime", "segment"), "endTime")
    if start >= end:
        # accepted as authored; the locator only promises sensible output for start < end
        logger.warning(
            "segment %r has startTime %d >= endTime %d",
            d.get("label"),
            start,
            end,
            extra={"segment_id": d.get("id")},
        )
    return Segment(
        id=_text(d.get("id"), "id") or new_id(),
        start_time=start,
        end_time=end,
        label=_text(d.get("label"), "label") or "",
        rpm_range=_text(d.get("rpmRange"), "rpmRange") or "",
        position=_enum(Position, d.get("position"), "position") or Position.EITHER,
        resistance=_float(d.get("resistance"), "resistance"),
        power_shift=_enum(PowerShift, d.get("powerShift"), "powerShift") or PowerShift.LEFT,
        cue=_text(d.get("cue"), "cue"),
        leaderboard=_bool(d.get("leaderboard"), "leaderboard"),
        light_settings=_text(d.get("lightSettings"), "lightSettings"),
        cue_font_size=_enum(CueFontSize, d.get("cueFontSize"), "cueFontSize"),
        cue_pulsing=_bool(d.get("cuePulsing"), "cuePulsing"),
        events=[event_from_dict(ev) for ev in _list(d.get("events"), "events")],
    )


def segment_to_dict(seg: Segment) -> Dict:
    return {
        "id": seg.id,
        "startTime": seg.start_time,
        "endTime": seg.end_time,
        "label": seg.label,
        "rpmRange": seg.rpm_range,
        "position": seg.position.value,
        "resistance": seg.resistance,
        "powerShift": seg.power_shift.value,
        "cue": seg.cue,
        "leaderboard": seg.leaderboard,
        "lightSettings": seg.light_settings,
        "cueFontSize": _value(seg.cue_font_size),
        "cuePulsing": seg.cue_pulsing,
        "events": [event_to_dict(ev) for ev in seg.events],
    }


def track_from_dict(d: Dict) -> Track:
    name = _text(_require(d, "name", "track"), "name")
    leaderboard = _bool(d.get("leaderboard"), "leaderboard")
    cue_pulsing = _bool(d.get("cuePulsing"), "cuePulsing")
    return Track(
        id=_text(d.get("id"), "id") or new_id(),
        name=name,
        spotify_uri=_text(d.get("spotifyURI"), "spotifyURI") or "",
        segments=[segment_from_dict(seg) for seg in _list(d.get("segments"), "segments")],
        leaderboard=True if leaderboard is None else leaderboard,
        light_settings=_text(d.get("lightSettings"), "lightSettings"),
        cue_font_size=_enum(CueFontSize, d.get("cueFontSize"), "cueFontSize") or CueFontSize.NORMAL,
        cue_pulsing=False if cue_pulsing is None else cue_pulsing,
        track_type=_enum(TrackType, d.get("trackType"), "trackType"),
        next_track_id=_text(d.get("nextTrackConfigId"), "nextTrackConfigId"),
        workout_id=_text(d.get("workoutId"), "workoutId"),
    )


def track_to_dict(track: Track) -> Dict:
    return {
        "id": track.id,
        "name": track.name,
        "spotifyURI": track.spotify_uri,
        "segments": [segment_to_dict(seg) for seg in track.segments],
        "nextTrackConfigId": track.next_track_id,
        "workoutId": track.workout_id,
        "trackType": _value(track.track_type),
        "leaderboard": track.leaderboard,
        "lightSettings": track.light_settings,
        "cueFontSize": track.cue_font_size.value,
        "cuePulsing": track.cue_pulsing,
    }


def workout_from_dict(d: Dict) -> Workout:
    name = _text(_require(d, "name", "workout"), "name")
    return Workout(
        id=_text(d.get("id"), "id") or new_id(),
        name=name,
        tracks=[track_from_dict(t) for t in _list(d.get("tracks"), "tracks")],
    )


def workout_to_dict(workout: Workout) -> Dict:
    return {
        "id": workout.id,
        "name": workout.name,
        "tracks": [track_to_dict(t) for t in workout.tracks],
    }


def transition_state_from_dict(d: Dict) -> TransitionState:
    """Decode a resolved state as produced by ``EffectiveValues`` (snake_case keys)."""
    position = _enum(Position, _require(d, "position", "state"), "position")
    power_shift = _enum(PowerShift, _require(d, "power_shift", "state"), "power_shift")
    leaderboard = _bool(d.get("leaderboard"), "leaderboard")
    return TransitionState(
        position=position,
        rpm_range=_text(d.get("rpm_range"), "rpm_range") or "",
        resistance=_float(d.get("resistance"), "resistance"),
        power_shift=power_shift,
        leaderboard=True if leaderboard is None else leaderboard,
        light_settings=_text(d.get("light_settings"), "light_settings") or None,
    )


def dumps_track(track: Track) -> str:
    return json.dumps(track_to_dict(track), ensure_ascii=False, indent=2, sort_keys=True)


def loads_track(text: str) -> Track:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TrackFormatError(f"invalid track JSON: {exc}") from exc
    return track_from_dict(raw)


def loads_workouts(text: str) -> List[Workout]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TrackFormatError(f"invalid workout JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise TrackFormatError("workout export must be a list")
    return [workout_from_dict(w) for w in raw]


def dumps_workouts(workouts: List[Workout]) -> str:
    return json.dumps([workout_to_dict(w) for w in workouts], ensure_ascii=False, indent=2, sort_keys=True)
