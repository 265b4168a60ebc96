"""Tests for override-chain resolution and display formatting."""

from __future__ import annotations

import pytest

from velocue.core.resolver import (
    effective_values,
    format_resistance,
    format_workload_line,
    preview_first_segment,
    resolve,
)
from velocue.core.timeline import (
    CueFontSize,
    Position,
    PowerShift,
    Segment,
    SegmentEvent,
    Track,
    TrackDefaults,
)


def _segment(**overrides) -> Segment:
    base = dict(start_time=0, end_time=60, label="Climb", rpm_range="60-70", position=Position.SEATED)
    base.update(overrides)
    return Segment(**base)


class TestResolveHelper:
    def test_first_present_wins(self) -> None:
        assert resolve(None, "segment", "track") == "segment"

    def test_false_and_zero_are_present(self) -> None:
        assert resolve(False, True) is False
        assert resolve(0.0, 2.0) == 0.0

    def test_all_absent(self) -> None:
        assert resolve(None, None) is None


class TestEffectiveValues:
    def test_segment_only(self) -> None:
        values = effective_values(_segment(), None, TrackDefaults())
        assert values.cue is None
        assert values.rpm_range == "60-70"
        assert values.position is Position.SEATED
        assert values.resistance is None
        assert values.power_shift is PowerShift.LEFT
        assert values.leaderboard is True
        assert values.light_settings is None
        assert values.cue_font_size is CueFontSize.NORMAL
        assert values.cue_pulsing is False

    def test_event_overrides_segment(self) -> None:
        event = SegmentEvent(offset=5, cue="Up!", rpm_range="90", position=Position.STANDING, resistance=1.5, power_shift=PowerShift.RIGHT)
        values = effective_values(_segment(cue="Sit", resistance=1.0), event)
        assert values.cue == "Up!"
        assert values.rpm_range == "90"
        assert values.position is Position.STANDING
        assert values.resistance == 1.5
        assert values.power_shift is PowerShift.RIGHT

    def test_absent_event_override_falls_to_segment(self) -> None:
        values = effective_values(_segment(resistance=2.0, cue="Hold"), SegmentEvent(offset=3))
        assert values.resistance == 2.0
        assert values.cue == "Hold"

    @pytest.mark.parametrize(
        ("event_value", "segment_value", "track_value", "expected"),
        [
            (False, None, True, False),
            (None, False, True, False),
            (None, None, False, False),
            (None, None, True, True),
            (True, False, False, True),
        ],
    )
    def test_leaderboard_three_levels(self, event_value, segment_value, track_value, expected) -> None:
        values = effective_values(
            _segment(leaderboard=segment_value),
            SegmentEvent(offset=0, leaderboard=event_value),
            TrackDefaults(leaderboard=track_value),
        )
        assert values.leaderboard is expected

    def test_font_size_and_pulsing_fall_to_track(self) -> None:
        defaults = TrackDefaults(cue_font_size=CueFontSize.LARGE, cue_pulsing=True)
        values = effective_values(_segment(), SegmentEvent(offset=0), defaults)
        assert values.cue_font_size is CueFontSize.LARGE
        assert values.cue_pulsing is True

    def test_font_size_segment_beats_track(self) -> None:
        defaults = TrackDefaults(cue_font_size=CueFontSize.LARGE)
        values = effective_values(_segment(cue_font_size=CueFontSize.SMALL), None, defaults)
        assert values.cue_font_size is CueFontSize.SMALL

    def test_empty_light_settings_fall_through(self) -> None:
        defaults = TrackDefaults(light_settings="Blue wash")
        values = effective_values(_segment(light_settings=""), SegmentEvent(offset=0, light_settings=""), defaults)
        assert values.light_settings == "Blue wash"

    def test_empty_light_settings_everywhere_is_absent(self) -> None:
        values = effective_values(_segment(light_settings=""), None, TrackDefaults(light_settings=""))
        assert values.light_settings is None

    def test_event_light_settings_win(self) -> None:
        values = effective_values(_segment(light_settings="Red"), SegmentEvent(offset=0, light_settings="Strobe"))
        assert values.light_settings == "Strobe"

    def test_pure(self) -> None:
        seg = _segment(leaderboard=False)
        event = SegmentEvent(offset=1, cue="Go")
        assert effective_values(seg, event) == effective_values(seg, event)

    def test_track_defaults_property(self) -> None:
        track = Track(name="t", leaderboard=False, light_settings="Dim", cue_pulsing=True)
        assert track.defaults == TrackDefaults(leaderboard=False, light_settings="Dim", cue_pulsing=True)


class TestPreview:
    def test_first_segment_without_event(self, climb_track: Track) -> None:
        values = preview_first_segment(climb_track)
        assert values.rpm_range == "80-100"
        assert values.position is Position.SEATED

    def test_empty_track(self) -> None:
        assert preview_first_segment(Track(name="empty")) is None


class TestFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ""), (0, "B"), (0.0, "B"), (2.0, "B+2"), (2.5, "B+2.5"), (10, "B+10")],
    )
    def test_format_resistance(self, value, expected) -> None:
        assert format_resistance(value) == expected

    def test_workload_line_defaults(self) -> None:
        assert format_workload_line("", None, PowerShift.LEFT) == " / B / LEFT"

    def test_workload_line_from_values(self) -> None:
        values = effective_values(_segment(resistance=2.0, power_shift=PowerShift.MIDDLE))
        assert values.workload_line == "60-70 / B+2 / MIDDLE"
