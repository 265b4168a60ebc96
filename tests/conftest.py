"""Shared fixtures: a small three-segment ride."""

from __future__ import annotations

import pytest

from velocue.core.timeline import (
    CueFontSize,
    Position,
    PowerShift,
    Segment,
    SegmentEvent,
    Track,
)


@pytest.fixture
def climb_track() -> Track:
    return Track(
        name="Losing It (spin edit)",
        spotify_uri="spotify:track:abc",
        cue_font_size=CueFontSize.NORMAL,
        segments=[
            Segment(
                id="seg-b",
                start_time=42,
                end_time=90,
                label="Standing climb",
                rpm_range="60-70",
                position=Position.STANDING,
                resistance=2.0,
                power_shift=PowerShift.MIDDLE,
                events=[
                    SegmentEvent(id="ev-b2", offset=30, cue="Last push", position=Position.SEATED),
                    SegmentEvent(id="ev-b1", offset=10, resistance=3.5),
                ],
            ),
            Segment(
                id="seg-a",
                start_time=0,
                end_time=42,
                label="Warm up",
                rpm_range="80-100",
                position=Position.SEATED,
            ),
            Segment(
                id="seg-c",
                start_time=100,
                end_time=130,
                label="Sprint",
                rpm_range="100-110",
                position=Position.SEATED,
                power_shift=PowerShift.RIGHT,
                leaderboard=False,
                light_settings="Strobe",
            ),
        ],
    )
