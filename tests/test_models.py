"""
Tests for the domain models.

Covers:
1. Time and duration formatting (24/12-hour, missing values)
2. TimeRange validity and the "N/A" invalid range
3. Threshold clamping at the settings boundary
4. SunTimes helpers and serialization
"""

import sys
from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
import pytz

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goldenhour.core.models import (
    ElevationThresholds,
    Location,
    SolarPosition,
    SunTimes,
    TimeRange,
    format_duration,
    format_time,
)

LONDON = pytz.timezone("Europe/London")


def _local(hour, minute):
    return LONDON.localize(datetime(2026, 1, 2, hour, minute))


class TestFormatting:
    """Tests for format_time and format_duration."""

    def test_missing_time(self):
        assert format_time(None) == "--:--"
        assert format_time(None, use_24_hour=False) == "--:--"

    def test_24_hour(self):
        assert format_time(_local(15, 4)) == "15:04"
        assert format_time(_local(8, 6)) == "08:06"

    def test_12_hour(self):
        assert format_time(_local(15, 4), use_24_hour=False) == "3:04 PM"
        assert format_time(_local(0, 30), use_24_hour=False) == "12:30 AM"
        assert format_time(_local(11, 5), use_24_hour=False) == "11:05 AM"

    def test_duration_minutes_only(self):
        assert format_duration(timedelta(minutes=45, seconds=50)) == "45 min"

    def test_duration_whole_hours(self):
        assert format_duration(timedelta(hours=2)) == "2h"

    def test_duration_hours_and_minutes(self):
        assert format_duration(timedelta(minutes=90)) == "1h 30m"


class TestTimeRange:
    """Tests for TimeRange validity."""

    def test_empty_range_is_invalid(self):
        """The default range is the explicit 'no range today' value."""
        time_range = TimeRange()
        assert not time_range.is_valid()
        assert time_range.duration() is None
        assert time_range.format() == "N/A"
        assert time_range.format_duration() == "N/A"

    def test_one_sided_range_is_invalid(self):
        assert not TimeRange(start=_local(8, 0)).is_valid()
        assert not TimeRange(end=_local(8, 0)).is_valid()

    def test_zero_length_range_is_invalid(self):
        """A zero-length range is distinguishable from a missing one but still invalid."""
        time_range = TimeRange(start=_local(8, 0), end=_local(8, 0))
        assert not time_range.is_valid()
        assert time_range.duration() == timedelta(0)

    def test_reversed_range_is_invalid(self):
        assert not TimeRange(start=_local(9, 0), end=_local(8, 0)).is_valid()

    def test_valid_range(self):
        time_range = TimeRange(start=_local(8, 6), end=_local(8, 59))
        assert time_range.is_valid()
        assert time_range.duration_minutes() == 53.0
        assert time_range.format() == "08:06 - 08:59"
        assert time_range.format(use_24_hour=False) == "8:06 AM - 8:59 AM"
        assert time_range.format_duration() == "53 min"

    def test_contains(self):
        time_range = TimeRange(start=_local(8, 0), end=_local(9, 0))
        assert time_range.contains(_local(8, 30))
        assert not time_range.contains(_local(9, 30))
        assert not TimeRange().contains(_local(8, 30))


class TestElevationThresholds:
    """Tests for threshold clamping."""

    def test_defaults(self):
        thresholds = ElevationThresholds()
        assert thresholds.golden_elevation == 6.0
        assert thresholds.blue_start == -4.0
        assert thresholds.blue_end == -8.0

    def test_valid_values_unchanged(self):
        thresholds = ElevationThresholds(10.0, -2.0, -12.0)
        assert thresholds.validated() == thresholds

    def test_golden_elevation_clamped(self):
        assert ElevationThresholds(golden_elevation=-3.0).validated().golden_elevation == 0.0
        assert ElevationThresholds(golden_elevation=25.0).validated().golden_elevation == 15.0

    def test_blue_start_clamped(self):
        assert ElevationThresholds(blue_start=2.0).validated().blue_start == 0.0
        assert ElevationThresholds(blue_start=-9.0, blue_end=-12.0).validated().blue_start == -6.0

    def test_blue_end_clamped(self):
        assert ElevationThresholds(blue_end=-2.0).validated().blue_end == -6.0
        assert ElevationThresholds(blue_end=-25.0).validated().blue_end == -18.0

    def test_validated_keeps_blue_end_below_blue_start(self):
        for blue_start in (0.0, -3.0, -6.0):
            for blue_end in (-6.0, -10.0, -18.0):
                result = ElevationThresholds(6.0, blue_start, blue_end).validated()
                assert result.blue_end <= result.blue_start, \
                    f"blue_end {result.blue_end} above blue_start {result.blue_start}"

    def test_immutable(self):
        thresholds = ElevationThresholds()
        with pytest.raises(FrozenInstanceError):
            thresholds.golden_elevation = 10.0

    def test_to_dict(self):
        assert ElevationThresholds().to_dict() == {
            "golden_elevation_deg": 6.0,
            "blue_start_deg": -4.0,
            "blue_end_deg": -8.0,
        }


class TestLocation:
    """Tests for Location."""

    def test_is_valid(self):
        assert Location(51.5, -0.1).is_valid()
        assert Location(90.0, 180.0).is_valid()
        assert not Location(91.0, 0.0).is_valid()
        assert not Location(0.0, -181.0).is_valid()

    def test_immutable(self):
        location = Location(51.5, -0.1)
        with pytest.raises(FrozenInstanceError):
            location.latitude = 0.0

    def test_with_timezone(self):
        location = Location(51.5, -0.1).with_timezone("Europe/London")
        assert location.timezone == "Europe/London"


class TestSunTimes:
    """Tests for SunTimes helpers."""

    def _sun_times(self, **kwargs):
        return SunTimes(
            date=date(2026, 1, 2),
            location=Location(51.5074, -0.1278, name="London"),
            timezone="Europe/London",
            **kwargs
        )

    def test_empty_result(self):
        sun_times = self._sun_times()
        assert not sun_times.has_valid_golden_hour()
        assert not sun_times.has_valid_blue_hour()
        assert sun_times.day_length() is None

    def test_one_valid_window_is_enough(self):
        sun_times = self._sun_times(
            golden_evening=TimeRange(start=_local(15, 10), end=_local(16, 0)),
            blue_morning=TimeRange(start=_local(7, 10), end=_local(7, 40)),
        )
        assert sun_times.has_valid_golden_hour()
        assert sun_times.has_valid_blue_hour()

    def test_day_length(self):
        sun_times = self._sun_times(sunrise=_local(8, 6), sunset=_local(16, 2))
        assert sun_times.day_length() == timedelta(hours=7, minutes=56)


class TestSolarPosition:
    """Tests for SolarPosition flags."""

    def test_flags(self):
        position = SolarPosition(
            timestamp=_local(8, 30),
            elevation=3.0,
            azimuth=130.0,
            light_quality="golden",
        )
        assert position.is_daylight
        assert position.is_golden_hour
        assert not position.is_blue_hour
