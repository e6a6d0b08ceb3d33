"""
Domain models for solar timing calculations.

All models are immutable value objects. A calculation builds them once, after
every event search has finished, so callers never observe a half-filled
result.

Absent instants are ``None``. A ``TimeRange`` with a missing side is the
explicit "no range today" value (e.g. no blue hour during polar summer) and is
reported as invalid, which keeps it distinguishable from a real range.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Dict, Optional

# Display placeholders
MISSING_TIME_DISPLAY = "--:--"
INVALID_RANGE_DISPLAY = "N/A"

# Settings-layer bounds for elevation thresholds (degrees)
GOLDEN_ELEVATION_MIN = 0.0
GOLDEN_ELEVATION_MAX = 15.0
BLUE_START_MIN = -6.0
BLUE_START_MAX = 0.0
BLUE_END_MIN = -18.0
BLUE_END_MAX = -6.0
BLUE_END_FALLBACK_GAP = 4.0


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def format_time(dt: Optional[datetime], use_24_hour: bool = True) -> str:
    """
    Format an instant as a clock time in its own timezone.

    Args:
        dt: Timezone-aware datetime, or None for an absent event
        use_24_hour: "15:04" style when True, "3:04 PM" style otherwise

    Returns:
        Formatted time, or "--:--" when the instant is absent
    """
    if dt is None:
        return MISSING_TIME_DISPLAY

    if use_24_hour:
        return dt.strftime("%H:%M")

    hour = dt.strftime("%I").lstrip("0")
    return f"{hour}:{dt.strftime('%M %p')}"


def format_duration(duration: timedelta) -> str:
    """Format a duration as "45 min", "2h" or "1h 30m"."""
    minutes = int(duration.total_seconds() // 60)

    if minutes < 60:
        return f"{minutes} min"

    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"

    return f"{hours}h {mins}m"


@dataclass(frozen=True)
class Location:
    """
    A geographic observer position.

    Attributes:
        latitude: Decimal degrees, -90 (south) to 90 (north)
        longitude: Decimal degrees, -180 (west) to 180 (east)
        elevation: Metres above sea level
        name: Human-readable label
        timezone: IANA timezone identifier, if already known
    """
    latitude: float
    longitude: float
    elevation: float = 0.0
    name: str = ""
    timezone: Optional[str] = None

    def is_valid(self) -> bool:
        """True when the coordinates are within their geographic ranges."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def with_timezone(self, timezone: str) -> "Location":
        return replace(self, timezone=timezone)


@dataclass(frozen=True)
class ElevationThresholds:
    """
    Sun elevation angles that define golden hour and blue hour.

    Attributes:
        golden_elevation: Upper bound of golden hour (degrees above horizon)
        blue_start: Blue hour bound nearer the horizon (degrees, <= 0)
        blue_end: Blue hour bound further below the horizon (degrees)

    The engine expects ``blue_end < blue_start`` and does not re-check it.
    Use ``validated()`` at the boundary where thresholds enter the system.
    """
    golden_elevation: float = 6.0
    blue_start: float = -4.0
    blue_end: float = -8.0

    def validated(self) -> "ElevationThresholds":
        """
        Return a copy clamped to the supported ranges.

        golden_elevation is kept in [0, 15], blue_start in [-6, 0] and
        blue_end in [-18, -6]. If blue_end still lies above blue_start it is
        moved to blue_start - 4.
        """
        golden = _clamp(self.golden_elevation, GOLDEN_ELEVATION_MIN, GOLDEN_ELEVATION_MAX)
        blue_start = _clamp(self.blue_start, BLUE_START_MIN, BLUE_START_MAX)
        blue_end = _clamp(self.blue_end, BLUE_END_MIN, BLUE_END_MAX)

        if blue_end > blue_start:
            blue_end = blue_start - BLUE_END_FALLBACK_GAP

        return ElevationThresholds(
            golden_elevation=golden,
            blue_start=blue_start,
            blue_end=blue_end,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "golden_elevation_deg": self.golden_elevation,
            "blue_start_deg": self.blue_start,
            "blue_end_deg": self.blue_end,
        }


@dataclass(frozen=True)
class SunEvent:
    """
    A named sun event on a given day.

    Attributes:
        name: Event identifier (e.g. "sunrise", "golden_morning_end")
        time: Localized instant, or None if the sun never reaches the
            elevation on that side of transit
        elevation: Sun elevation that defines the event (degrees)
    """
    name: str
    time: Optional[datetime]
    elevation: float

    @property
    def found(self) -> bool:
        return self.time is not None


@dataclass(frozen=True)
class TimeRange:
    """
    A period between two sun events.

    ``TimeRange()`` (both sides missing) is the invalid range returned when
    one of the defining events does not occur.
    """
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def is_valid(self) -> bool:
        """True iff both instants exist and end is strictly after start."""
        return self.start is not None and self.end is not None and self.end > self.start

    def duration(self) -> Optional[timedelta]:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start

    def duration_minutes(self) -> Optional[float]:
        duration = self.duration()
        if duration is None:
            return None
        return duration.total_seconds() / 60

    def format_duration(self) -> str:
        if not self.is_valid():
            return INVALID_RANGE_DISPLAY
        return format_duration(self.duration())

    def format(self, use_24_hour: bool = True) -> str:
        """Display string such as "07:58 - 08:41", or "N/A" when invalid."""
        if not self.is_valid():
            return INVALID_RANGE_DISPLAY
        return f"{format_time(self.start, use_24_hour)} - {format_time(self.end, use_24_hour)}"

    def contains(self, when: datetime) -> bool:
        return self.is_valid() and self.start <= when <= self.end


@dataclass(frozen=True)
class SunTimes:
    """
    Complete solar timing result for one location and date.

    Attributes:
        date: Calculation date (local calendar date)
        location: Observer location used
        timezone: Timezone the instants are localized to
        sunrise: Upper limb on the horizon before transit (None if absent)
        sunset: Upper limb on the horizon after transit (None if absent)
        solar_noon: Instant of maximum elevation
        solar_noon_elevation: Sun elevation at solar noon (degrees)
        golden_morning: Sun centre at 0° until it reaches golden_elevation
        golden_evening: Sun at golden_elevation until its centre reaches 0°
        blue_morning: Sun at blue_end until it reaches blue_start
        blue_evening: Sun at blue_start until it drops to blue_end
        thresholds: Elevation thresholds used for the derived ranges
        calculation_method: Solar position algorithm used
    """
    date: date
    location: Location
    timezone: str
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    solar_noon: Optional[datetime] = None
    solar_noon_elevation: Optional[float] = None
    golden_morning: TimeRange = field(default_factory=TimeRange)
    golden_evening: TimeRange = field(default_factory=TimeRange)
    blue_morning: TimeRange = field(default_factory=TimeRange)
    blue_evening: TimeRange = field(default_factory=TimeRange)
    thresholds: ElevationThresholds = field(default_factory=ElevationThresholds)
    calculation_method: str = "astral"

    def has_valid_golden_hour(self) -> bool:
        return self.golden_morning.is_valid() or self.golden_evening.is_valid()

    def has_valid_blue_hour(self) -> bool:
        return self.blue_morning.is_valid() or self.blue_evening.is_valid()

    def day_length(self) -> Optional[timedelta]:
        """Time between sunrise and sunset, None if either is absent."""
        if self.sunrise is None or self.sunset is None:
            return None
        return self.sunset - self.sunrise


@dataclass(frozen=True)
class SolarPosition:
    """
    Sun position at a specific moment.

    Attributes:
        timestamp: Instant of the calculation (timezone-aware)
        elevation: Topocentric elevation in degrees (negative below horizon)
        azimuth: Compass bearing in degrees (0=N, 90=E, 180=S, 270=W)
        light_quality: harsh, daylight, golden, transitional, blue or dark
        calculation_method: Algorithm used
    """
    timestamp: datetime
    elevation: float
    azimuth: float
    light_quality: str
    calculation_method: str = "astral"

    @property
    def is_daylight(self) -> bool:
        return self.elevation > 0

    @property
    def is_golden_hour(self) -> bool:
        return self.light_quality == "golden"

    @property
    def is_blue_hour(self) -> bool:
        return self.light_quality == "blue"
