"""Timeline model: tracks, segments and in-segment events."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


def new_id() -> str:
    return str(uuid.uuid4())


class Position(str, Enum):
    STANDING = "Standing"
    SEATED = "Seated"
    EITHER = "Either"


class PowerShift(str, Enum):
    LEFT = "LEFT"
    MIDDLE = "MIDDLE"
    RIGHT = "RIGHT"


class CueFontSize(str, Enum):
    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"


class TrackType(str, Enum):
    WARMUP = "Warmup"
    INTERVAL = "Interval"
    FIRST_CLIMB = "First Climb"
    HIIT = "HIIT"
    ISOLATION = "Isolation"
    ME_TIME = "MeTime"
    SPEED = "Speed"
    FINAL_CLIMB = "Final Climb"
    COOLDOWN = "Cooldown"

    @property
    def heart_rate_range(self) -> Optional[str]:
        return _HEART_RATE_RANGES.get(self)


# MeTime and Cooldown have no heart-rate target
_HEART_RATE_RANGES: Dict[TrackType, str] = {
    TrackType.WARMUP: "HR 30-60",
    TrackType.INTERVAL: "HR 60-80",
    TrackType.FIRST_CLIMB: "HR 70-95",
    TrackType.HIIT: "HR 70-95",
    TrackType.ISOLATION: "HR 50-70",
    TrackType.SPEED: "HR 50-70",
    TrackType.FINAL_CLIMB: "HR 75-95",
}


@dataclass
class SegmentEvent:
    """Timestamped override firing partway through a segment.

    Every field except ``offset`` is optional; ``None`` means "use the parent".
    """

    offset: int  # seconds from segment start
    cue: Optional[str] = None
    rpm_range: Optional[str] = None
    position: Optional[Position] = None
    resistance: Optional[float] = None  # 0 = base, >0 = B+X
    power_shift: Optional[PowerShift] = None
    leaderboard: Optional[bool] = None
    light_settings: Optional[str] = None
    cue_font_size: Optional[CueFontSize] = None
    cue_pulsing: Optional[bool] = None
    id: str = field(default_factory=new_id)


@dataclass
class Segment:
    """Half-open block ``[start_time, end_time)`` of the track in whole seconds."""

    start_time: int
    end_time: int
    label: str
    rpm_range: str = ""
    position: Position = Position.EITHER
    resistance: Optional[float] = None
    power_shift: PowerShift = PowerShift.LEFT
    cue: Optional[str] = None
    leaderboard: Optional[bool] = None
    light_settings: Optional[str] = None
    cue_font_size: Optional[CueFontSize] = None
    cue_pulsing: Optional[bool] = None
    events: List[SegmentEvent] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.events = sorted(self.events, key=lambda ev: ev.offset)

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class TrackDefaults:
    """Track-level fallbacks for the three-level override chains."""

    leaderboard: bool = True
    light_settings: Optional[str] = None
    cue_font_size: CueFontSize = CueFontSize.NORMAL
    cue_pulsing: bool = False


@dataclass
class Track:
    name: str
    spotify_uri: str = ""
    segments: List[Segment] = field(default_factory=list)
    leaderboard: bool = True
    light_settings: Optional[str] = None
    cue_font_size: CueFontSize = CueFontSize.NORMAL
    cue_pulsing: bool = False
    track_type: Optional[TrackType] = None
    next_track_id: Optional[str] = None  # linked track shown as a preview
    workout_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.segments = sorted(self.segments, key=lambda seg: seg.start_time)

    @property
    def defaults(self) -> TrackDefaults:
        return TrackDefaults(
            leaderboard=self.leaderboard,
            light_settings=self.light_settings,
            cue_font_size=self.cue_font_size,
            cue_pulsing=self.cue_pulsing,
        )

    @property
    def total_duration(self) -> int:
        return self.segments[-1].end_time if self.segments else 0


@dataclass
class Workout:
    name: str
    tracks: List[Track] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def find_track(self, track_id: Optional[str]) -> Optional[Track]:
        if track_id is None:
            return None
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def linked_track(self, track: Track) -> Optional[Track]:
        """Track configured to follow ``track``, if it lives in this workout."""
        return self.find_track(track.next_track_id)
