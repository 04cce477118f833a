"""Tests for request validation.

Covers the timing sequence rules (empty, index gaps/reordering, strict
ordering) and the overlay width range, including check order.
"""

import math

import pytest

from slidecast.domain import CompositionRequest, SlideTiming
from slidecast.errors import (
    EmptyTimings,
    InvalidSlideIndices,
    NonIncreasingTimings,
    OverlayWidthOutOfRange,
    ValidationError,
)
from slidecast.validate import validate_request, validate_timings


def _timings(*times):
    return [SlideTiming(i, t) for i, t in enumerate(times)]


def _request(**overrides):
    fields = dict(
        source_deck_path="a.mp4",
        recording_path="b.mp4",
        output_path="out.mp4",
        overlay_relative_width=0.25,
        timings=tuple(_timings(0.1, 1.0)),
    )
    fields.update(overrides)
    return CompositionRequest(**fields)


class TestValidateTimings:
    def test_valid_sequence(self):
        validate_timings(_timings(0.5, 10.0, 20.0))  # should not raise

    def test_single_timing(self):
        validate_timings(_timings(0.0))

    def test_empty_raises(self):
        with pytest.raises(EmptyTimings):
            validate_timings([])

    def test_index_gap_raises(self):
        timings = [SlideTiming(0, 0.5), SlideTiming(2, 1.0)]
        with pytest.raises(InvalidSlideIndices) as exc_info:
            validate_timings(timings)
        assert exc_info.value.position == 1
        assert exc_info.value.found == 2

    def test_not_starting_at_zero_raises(self):
        timings = [SlideTiming(1, 0.5), SlideTiming(2, 1.0)]
        with pytest.raises(InvalidSlideIndices):
            validate_timings(timings)

    def test_reordered_indices_raise_even_with_valid_times(self):
        timings = [SlideTiming(1, 0.5), SlideTiming(0, 1.0)]
        with pytest.raises(InvalidSlideIndices):
            validate_timings(timings)

    def test_equal_times_raise(self):
        with pytest.raises(NonIncreasingTimings) as exc_info:
            validate_timings(_timings(0.5, 1.0, 1.0))
        assert exc_info.value.position == 1

    def test_decreasing_times_raise(self):
        with pytest.raises(NonIncreasingTimings):
            validate_timings(_timings(5.0, 2.0))

    def test_index_error_reported_before_order_error(self):
        timings = [SlideTiming(0, 5.0), SlideTiming(1, 1.0), SlideTiming(3, 9.0)]
        with pytest.raises(InvalidSlideIndices):
            validate_timings(timings)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_timings([])


class TestValidateRequest:
    def test_valid_request(self):
        validate_request(_request())

    @pytest.mark.parametrize("width", [0.05, 0.5])
    def test_bounds_are_inclusive(self, width):
        validate_request(_request(overlay_relative_width=width))

    @pytest.mark.parametrize("width", [0.0, 0.049, 0.51, 1.0, -0.2])
    def test_width_out_of_range(self, width):
        with pytest.raises(OverlayWidthOutOfRange) as exc_info:
            validate_request(_request(overlay_relative_width=width))
        assert exc_info.value.value == width
        assert str(width) in str(exc_info.value)

    def test_nan_width_rejected(self):
        with pytest.raises(OverlayWidthOutOfRange):
            validate_request(_request(overlay_relative_width=math.nan))

    def test_message_states_enforced_range(self):
        with pytest.raises(OverlayWidthOutOfRange, match=r"\[0\.05, 0\.5\]"):
            validate_request(_request(overlay_relative_width=0.7))

    def test_width_checked_before_timings(self):
        req = _request(overlay_relative_width=0.9, timings=())
        with pytest.raises(OverlayWidthOutOfRange):
            validate_request(req)

    def test_delegates_to_timing_checks(self):
        with pytest.raises(EmptyTimings):
            validate_request(_request(timings=()))
        with pytest.raises(ValidationError):
            validate_request(_request(timings=tuple(_timings(2.0, 1.0))))
