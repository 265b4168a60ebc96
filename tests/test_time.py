"""Tests for ``mm:ss`` helpers and engine configuration."""

from __future__ import annotations

import pytest

from velocue.core.config import EngineConfig
from velocue.core.time import format_time, parse_time


class TestFormatTime:
    @pytest.mark.parametrize(("seconds", "expected"), [(0, "00:00"), (59, "00:59"), (61, "01:01"), (754, "12:34")])
    def test_format(self, seconds: int, expected: str) -> None:
        assert format_time(seconds) == expected


class TestParseTime:
    @pytest.mark.parametrize(("text", "expected"), [("0:00", 0), ("1:05", 65), ("12:34", 754), ("99:59", 5999)])
    def test_valid(self, text: str, expected: int) -> None:
        assert parse_time(text) == expected

    @pytest.mark.parametrize("text", ["", "1", "1:5", "1:60", "123:00", "-1:00", "1:00:00", "a:bc", " 1:00"])
    def test_invalid(self, text: str) -> None:
        assert parse_time(text) is None


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.lookahead_seconds == 1
        assert config.max_pulse_seconds == 10.0

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VELOCUE_LOOKAHEAD_SECONDS", "2")
        monkeypatch.setenv("VELOCUE_MAX_PULSE_SECONDS", "4.5")
        config = EngineConfig.from_env()
        assert config.lookahead_seconds == 2
        assert config.max_pulse_seconds == 4.5
