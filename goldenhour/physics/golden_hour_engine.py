"""
Golden Hour Engine: golden hour and blue hour windows from sun elevation.

==============================================================================
DEFINITIONS
==============================================================================

Golden hour and blue hour are defined by the sun's angular position relative
to the horizon, not by clock offsets from sunrise and sunset. Three
configurable thresholds drive everything:

    - golden_elevation (default +6°): end of morning golden hour and start
      of evening golden hour
    - blue_start (default -4°): blue hour bound nearer the horizon
    - blue_end (default -8°): blue hour bound further below the horizon

Derived windows:

    Range            Start                          End
    Golden Morning   0°, rising                     golden_elevation, rising
    Golden Evening   golden_elevation, setting      0°, setting
    Blue Morning     blue_end, rising               blue_start, rising
    Blue Evening     blue_start, setting            blue_end, setting

Morning windows go from the lower elevation to the higher one as the sun
climbs; evening windows go from higher to lower as it sinks. Keeping that
order is what makes every window satisfy end > start.

A window is built only when both of its events happen on the day. Near the
poles the sun may never set (no blue hour) or never rise (no golden hour);
those windows come back as the invalid ``TimeRange()``, never as an error.

Atmospheric Refraction:
    Threshold elevations are apparent elevations (refraction applied by the
    position algorithm), so golden morning starts when the sun's centre
    appears on the horizon. Sunrise and sunset themselves use the standard
    upper-limb convention and fall a couple of minutes outside the golden
    windows.

References:
    [1] Meeus, J. (1991). Astronomical Algorithms. Willmann-Bell.
    [2] NOAA Solar Calculator. https://gml.noaa.gov/grad/solcalc/
==============================================================================
"""

import logging
from datetime import date, datetime, tzinfo
from typing import Dict, List, Optional, Tuple, Union

import pytz

from ..core.models import (
    ElevationThresholds,
    Location,
    SolarPosition,
    SunEvent,
    SunTimes,
    TimeRange,
)
from ..tools.timezone_lookup import FALLBACK_TIMEZONE, TimezoneResolver, load_timezone
from .event_engine import HORIZON_ELEVATION, CustomSunEvent, SunEventEngine

logger = logging.getLogger(__name__)

# Custom event names
GOLDEN_MORNING_START = "golden_morning_start"
GOLDEN_MORNING_END = "golden_morning_end"
GOLDEN_EVENING_START = "golden_evening_start"
GOLDEN_EVENING_END = "golden_evening_end"
BLUE_MORNING_START = "blue_morning_start"
BLUE_MORNING_END = "blue_morning_end"
BLUE_EVENING_START = "blue_evening_start"
BLUE_EVENING_END = "blue_evening_end"

# Above this elevation light is classed as harsh (degrees)
HARSH_LIGHT_ELEVATION = 20.0


def build_custom_events(thresholds: ElevationThresholds) -> List[CustomSunEvent]:
    """
    Create the eight event specifications behind the four windows.

    Threshold values are copied into each event, so later changes to the
    thresholds cannot leak into a calculation already under way.

    Args:
        thresholds: Elevation thresholds snapshot

    Returns:
        List of CustomSunEvent, start and end for each window
    """
    golden = thresholds.golden_elevation
    blue_start = thresholds.blue_start
    blue_end = thresholds.blue_end

    return [
        # Morning = before solar noon
        CustomSunEvent(GOLDEN_MORNING_START, HORIZON_ELEVATION, before_transit=True),
        CustomSunEvent(GOLDEN_MORNING_END, golden, before_transit=True),
        # Evening = after solar noon
        CustomSunEvent(GOLDEN_EVENING_START, golden, before_transit=False),
        CustomSunEvent(GOLDEN_EVENING_END, HORIZON_ELEVATION, before_transit=False),
        # Deeper twilight comes first in the morning
        CustomSunEvent(BLUE_MORNING_START, blue_end, before_transit=True),
        CustomSunEvent(BLUE_MORNING_END, blue_start, before_transit=True),
        # and last in the evening
        CustomSunEvent(BLUE_EVENING_START, blue_start, before_transit=False),
        CustomSunEvent(BLUE_EVENING_END, blue_end, before_transit=False),
    ]


def extract_time_range(events: Dict[str, SunEvent], start_key: str, end_key: str) -> TimeRange:
    """Build a window from two events, or the invalid range if either is missing."""
    start = events.get(start_key)
    end = events.get(end_key)

    if start is not None and end is not None and start.found and end.found:
        return TimeRange(start=start.time, end=end.time)

    return TimeRange()


def classify_light(elevation: float, thresholds: ElevationThresholds) -> str:
    """
    Classify lighting conditions from the sun's elevation.

    Returns:
        "harsh", "daylight", "golden", "transitional", "blue" or "dark"
    """
    if elevation > HARSH_LIGHT_ELEVATION:
        return "harsh"
    if elevation >= thresholds.golden_elevation:
        return "daylight"
    if elevation >= HORIZON_ELEVATION:
        return "golden"
    if elevation > thresholds.blue_start:
        return "transitional"
    if elevation >= thresholds.blue_end:
        return "blue"
    return "dark"


class GoldenHourEngine:
    """
    Solar timing calculator for golden hour and blue hour.

    Combines the event engine with a set of elevation thresholds and an
    optional timezone resolver. Every ``calculate`` call works on an
    immutable snapshot of the thresholds and returns a fresh ``SunTimes``.

    Example:
        >>> engine = GoldenHourEngine()
        >>> times = engine.calculate(
        ...     Location(latitude=51.5074, longitude=-0.1278, timezone="Europe/London"),
        ...     date(2026, 1, 2),
        ... )
        >>> times.golden_morning.is_valid()
        True

    Precondition:
        ``thresholds.blue_end < thresholds.blue_start``. The engine does not
        re-check it; pass thresholds through ``ElevationThresholds.validated()``
        where they enter the system.
    """

    def __init__(
        self,
        event_engine: Optional[SunEventEngine] = None,
        thresholds: Optional[ElevationThresholds] = None,
        timezone_resolver: Optional[TimezoneResolver] = None
    ):
        """
        Initialize the Golden Hour Engine.

        Args:
            event_engine: Crossing search engine (default: astral, 10 min step)
            thresholds: Default elevation thresholds
            timezone_resolver: Used when a location carries no usable timezone
        """
        self.event_engine = event_engine or SunEventEngine()
        self.thresholds = thresholds or ElevationThresholds()
        self.timezone_resolver = timezone_resolver

        logger.info(
            f"GoldenHourEngine initialized with {self.calculation_method} method "
            f"(golden {self.thresholds.golden_elevation}°, "
            f"blue {self.thresholds.blue_start}° to {self.thresholds.blue_end}°)"
        )

    @property
    def position_calculator(self):
        return self.event_engine.position_calculator

    @property
    def calculation_method(self) -> str:
        return self.position_calculator.method

    def update_thresholds(self, thresholds: ElevationThresholds) -> None:
        """Replace the default thresholds used by later calculations."""
        self.thresholds = thresholds
        logger.debug(f"Thresholds updated: {thresholds}")

    def resolve_timezone(self, location: Location) -> Tuple[tzinfo, str]:
        """
        Pick the timezone for a location.

        Order: the location's own timezone if pytz knows it, then the
        resolver, then UTC.
        """
        if location.timezone:
            tz, name = load_timezone(location.timezone)
            if name == location.timezone:
                return tz, name

        if self.timezone_resolver is not None:
            return load_timezone(
                self.timezone_resolver.resolve(location.latitude, location.longitude)
            )

        return pytz.UTC, FALLBACK_TIMEZONE

    def calculate(
        self,
        location: Location,
        target_date: Union[date, datetime],
        thresholds: Optional[ElevationThresholds] = None
    ) -> SunTimes:
        """
        Calculate sunrise, sunset, solar noon and the four windows.

        Args:
            location: Observer location
            target_date: Local calendar date (a datetime is reduced to its date)
            thresholds: Override for this call only

        Returns:
            SunTimes with all instants localized to the location's timezone

        Raises:
            SolarCalculationError: If the position algorithm fails
        """
        snapshot = thresholds or self.thresholds
        if isinstance(target_date, datetime):
            target_date = target_date.date()

        tz, tz_name = self.resolve_timezone(location)

        events = self.event_engine.get_sun_events(
            target_date,
            location,
            build_custom_events(snapshot),
            tz=tz
        )
        others = events.others

        sun_times = SunTimes(
            date=target_date,
            location=location.with_timezone(tz_name),
            timezone=tz_name,
            sunrise=events.sunrise.time,
            sunset=events.sunset.time,
            solar_noon=events.transit.time,
            solar_noon_elevation=events.transit.elevation,
            golden_morning=extract_time_range(others, GOLDEN_MORNING_START, GOLDEN_MORNING_END),
            golden_evening=extract_time_range(others, GOLDEN_EVENING_START, GOLDEN_EVENING_END),
            blue_morning=extract_time_range(others, BLUE_MORNING_START, BLUE_MORNING_END),
            blue_evening=extract_time_range(others, BLUE_EVENING_START, BLUE_EVENING_END),
            thresholds=snapshot,
            calculation_method=self.position_calculator.resolve_method(location),
        )

        logger.debug(
            f"Calculated sun times for {location.name or 'location'} on {target_date} ({tz_name}): "
            f"golden hour {'yes' if sun_times.has_valid_golden_hour() else 'no'}, "
            f"blue hour {'yes' if sun_times.has_valid_blue_hour() else 'no'}"
        )

        return sun_times

    def get_current_position(
        self,
        location: Location,
        now: Optional[datetime] = None,
        thresholds: Optional[ElevationThresholds] = None
    ) -> SolarPosition:
        """
        Get the sun position for a location right now.

        Args:
            location: Observer location
            now: Instant to evaluate (default: current time)
            thresholds: Override for the light classification

        Returns:
            SolarPosition with timestamp localized to the location's timezone
        """
        snapshot = thresholds or self.thresholds
        tz, _ = self.resolve_timezone(location)
        if now is None:
            now = datetime.now(pytz.UTC)

        elevation, azimuth = self.position_calculator.position(now, location)
        timestamp = now.astimezone(tz) if now.tzinfo is not None else pytz.UTC.localize(now).astimezone(tz)

        return SolarPosition(
            timestamp=timestamp,
            elevation=elevation,
            azimuth=azimuth,
            light_quality=classify_light(elevation, snapshot),
            calculation_method=self.position_calculator.resolve_method(location),
        )
