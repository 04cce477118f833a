"""Tests for ffmpeg -progress line parsing."""

import pytest

from slidecast.progress import (
    ProgressPrinter,
    is_progress_line,
    parse_clock,
    parse_out_time,
    progress_fraction,
)


class TestParseOutTime:
    def test_out_time_us(self):
        assert parse_out_time("out_time_us=2500000") == 2.5

    def test_out_time_ms_is_microseconds(self):
        assert parse_out_time("out_time_ms=1500000") == 1.5

    def test_out_time_clock(self):
        assert parse_out_time("out_time=00:01:02.500000") == pytest.approx(62.5)

    def test_other_keys_ignored(self):
        assert parse_out_time("frame=120") is None
        assert parse_out_time("progress=continue") is None

    def test_unavailable_value(self):
        assert parse_out_time("out_time_us=N/A") is None
        assert parse_out_time("out_time=N/A") is None

    def test_not_key_value(self):
        assert parse_out_time("[libx264 @ 0x55] frame I:1") is None


class TestIsProgressLine:
    @pytest.mark.parametrize("line", [
        "frame=120", "out_time_us=4000000", "out_time=00:00:04.000000",
        "stream_0_0_q=28.0", "speed=1.5x", "progress=end\n",
    ])
    def test_progress_keys(self, line):
        assert is_progress_line(line)

    @pytest.mark.parametrize("line", [
        "x264 [error]: invalid preset 'bogus'",
        "[libx264 @ 0x55] frame I:1",
        "Stream mapping:",
        "filter=scale=1920:1080",
        "",
    ])
    def test_log_lines(self, line):
        assert not is_progress_line(line)


class TestParseClock:
    def test_hours(self):
        assert parse_clock("01:00:00.00") == 3600.0

    def test_malformed(self):
        assert parse_clock("12.5") is None


class TestProgressFraction:
    def test_fraction(self):
        assert progress_fraction("out_time_us=5000000", 20.0) == 0.25

    def test_clamped_to_one(self):
        assert progress_fraction("out_time_us=30000000", 20.0) == 1.0

    def test_negative_time_clamped_to_zero(self):
        assert progress_fraction("out_time_us=-23219", 20.0) == 0.0

    @pytest.mark.parametrize("duration", [None, 0, -1])
    def test_unknown_duration(self, duration):
        assert progress_fraction("out_time_us=5000000", duration) is None


class TestProgressPrinter:
    def test_prints_increasing_percentages(self, capsys):
        printer = ProgressPrinter(10.0, label="Composing")
        for line in ["frame=1", "out_time_us=1000000", "out_time_us=1000000",
                     "out_time_us=10000000"]:
            printer(line)
        out = capsys.readouterr().out
        assert out.count("Composing:") == 2
        assert " 10%" in out
        assert "100%" in out
        assert printer.last_percent == 100
