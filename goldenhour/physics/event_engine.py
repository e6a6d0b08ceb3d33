"""
Sun Event Engine: finds when the sun crosses given elevation angles.

For one local calendar day the sun's elevation is a smooth curve with a
single maximum (solar transit) at all but extreme latitudes. Every event is a
crossing of that curve with a horizontal line at the target elevation:

    - Before-transit events are searched in [local midnight, transit] and
      resolve to the last ascending crossing before transit.
    - After-transit events are searched in [transit, next local midnight]
      and resolve to the first descending crossing after transit.

Search strategy:
    1. Sample the elevation curve every ``step_minutes``.
    2. Refine the highest sample to the transit instant with a
       golden-section search.
    3. For each event, find the sample pair that brackets the target on
       the requested side of transit and bisect it down to
       ``tolerance_seconds``.

If no bracket exists (the sun never rises that high, or never sinks that
low) the event is absent. That is a normal outcome, not an error.

Sunrise and sunset follow the standard convention: the upper limb touches
the horizon when the geometric (unrefracted) elevation of the centre is
-0.833° (34' of refraction plus a 16' semidiameter). They are searched on the
geometric curve. Custom events use the apparent (refracted) curve.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

import pytz

from ..core.exceptions import SolarCalculationError
from ..core.models import Location, SunEvent
from .solar_position import SolarPositionCalculator

logger = logging.getLogger(__name__)

SUNRISE = "sunrise"
SUNSET = "sunset"
TRANSIT = "transit"

# Apparent elevation of the sun's centre on the horizon (degrees)
HORIZON_ELEVATION = 0.0

# Geometric elevation of the sun's centre at sunrise and sunset (degrees)
SUNRISE_ELEVATION = -0.833

DEFAULT_STEP_MINUTES = 10.0
DEFAULT_TOLERANCE_SECONDS = 1.0

_GOLDEN_RATIO = (math.sqrt(5.0) - 1.0) / 2.0

# (instant, elevation) pair on the elevation curve
Sample = Tuple[datetime, float]


@dataclass(frozen=True)
class CustomSunEvent:
    """
    Specification of an elevation crossing to search for.

    Attributes:
        name: Key under which the result is reported
        elevation: Target sun elevation in degrees, captured by value
        before_transit: Search the morning side (True) or evening side (False)
    """
    name: str
    elevation: float
    before_transit: bool


@dataclass(frozen=True)
class SunEvents:
    """
    Raw events for one local day.

    Attributes:
        transit: Maximum elevation of the day (always present)
        sunrise: Standard sunrise before transit (time is None if absent)
        sunset: Standard sunset after transit (time is None if absent)
        others: Custom events by name; events that do not occur are omitted
    """
    transit: SunEvent
    sunrise: SunEvent
    sunset: SunEvent
    others: Dict[str, SunEvent] = field(default_factory=dict)


def local_midnight(target_date: date, tz: tzinfo) -> datetime:
    """Midnight at the start of ``target_date`` in ``tz``."""
    naive = datetime.combine(target_date, time(0, 0, 0))
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


class SunEventEngine:
    """
    Computes transit, sunrise, sunset and custom elevation crossings.

    The engine holds no per-call state; one instance can serve concurrent
    calculations as long as the position calculator is re-entrant.

    Example:
        >>> engine = SunEventEngine(SolarPositionCalculator())
        >>> events = engine.get_sun_events(
        ...     date(2026, 1, 2),
        ...     Location(latitude=51.5074, longitude=-0.1278),
        ...     [CustomSunEvent("golden_morning_end", 6.0, True)],
        ...     tz=pytz.timezone("Europe/London"),
        ... )
        >>> events.others["golden_morning_end"].time
    """

    def __init__(
        self,
        position_calculator: Optional[SolarPositionCalculator] = None,
        step_minutes: float = DEFAULT_STEP_MINUTES,
        tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS
    ):
        if step_minutes <= 0:
            raise ValueError(f"step_minutes must be positive, got {step_minutes}")
        if tolerance_seconds <= 0:
            raise ValueError(f"tolerance_seconds must be positive, got {tolerance_seconds}")

        self.position_calculator = position_calculator or SolarPositionCalculator()
        self.step = timedelta(minutes=step_minutes)
        self.tolerance = timedelta(seconds=tolerance_seconds)

    def day_bounds(self, target_date: date, tz: tzinfo) -> Tuple[datetime, datetime]:
        """
        Local midnight of ``target_date`` and of the following day, in UTC.

        The window is 23 or 25 hours long on daylight-saving change days.

        Raises:
            SolarCalculationError: If the date has no following day
        """
        try:
            start = local_midnight(target_date, tz)
            end = local_midnight(target_date + timedelta(days=1), tz)
        except OverflowError as e:
            raise SolarCalculationError(f"Date {target_date} is out of range: {e}") from e

        return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)

    def get_sun_events(
        self,
        target_date: date,
        location: Location,
        custom_events: Iterable[CustomSunEvent] = (),
        tz: tzinfo = pytz.UTC
    ) -> SunEvents:
        """
        Find all events for one local day.

        Args:
            target_date: Local calendar date
            location: Observer location
            custom_events: Additional crossings to search for
            tz: Timezone defining the local day and used for the results

        Returns:
            SunEvents with every instant localized to ``tz``

        Raises:
            SolarCalculationError: If the position algorithm fails at any
                point; no partial result is returned
        """
        day_start, day_end = self.day_bounds(target_date, tz)
        samples = self._sample(day_start, day_end, location)

        transit_time, transit_elevation = self._find_transit(samples, location)

        # Morning and evening halves of each curve, keyed by refraction.
        # Refraction grows monotonically with elevation, so both curves peak
        # at the same instant.
        halves: Dict[bool, Tuple[List[Sample], List[Sample]]] = {}

        def split(refracted: bool) -> Tuple[List[Sample], List[Sample]]:
            if refracted not in halves:
                if refracted:
                    curve, peak = samples, (transit_time, transit_elevation)
                else:
                    curve = self._sample(day_start, day_end, location, refracted=False)
                    peak = (transit_time, self._elevation(transit_time, location, refracted=False))
                halves[refracted] = (
                    [s for s in curve if s[0] < transit_time] + [peak],
                    [peak] + [s for s in curve if s[0] > transit_time],
                )
            return halves[refracted]

        # Events sharing an elevation, side and curve resolve to the same instant
        crossings: Dict[Tuple[float, bool, bool], Optional[datetime]] = {}

        def crossing(elevation: float, before_transit: bool, refracted: bool = True) -> Optional[datetime]:
            key = (elevation, before_transit, refracted)
            if key not in crossings:
                morning, evening = split(refracted)
                if before_transit:
                    found = self._find_rising_crossing(morning, elevation, location, refracted)
                else:
                    found = self._find_setting_crossing(evening, elevation, location, refracted)
                crossings[key] = found.astimezone(tz) if found else None
            return crossings[key]

        sunrise = SunEvent(SUNRISE, crossing(SUNRISE_ELEVATION, True, refracted=False), SUNRISE_ELEVATION)
        sunset = SunEvent(SUNSET, crossing(SUNRISE_ELEVATION, False, refracted=False), SUNRISE_ELEVATION)

        others: Dict[str, SunEvent] = {}
        for custom in custom_events:
            found = crossing(custom.elevation, custom.before_transit)
            if found is not None:
                others[custom.name] = SunEvent(custom.name, found, custom.elevation)

        logger.debug(
            f"Sun events for {target_date} at ({location.latitude}, {location.longitude}): "
            f"transit {transit_time.isoformat()} at {transit_elevation:.2f}°, "
            f"{len(others)} custom events found"
        )

        return SunEvents(
            transit=SunEvent(TRANSIT, transit_time.astimezone(tz), transit_elevation),
            sunrise=sunrise,
            sunset=sunset,
            others=others,
        )

    def _elevation(self, when: datetime, location: Location, refracted: bool = True) -> float:
        return self.position_calculator.elevation(when, location, with_refraction=refracted)

    def _sample(
        self,
        start: datetime,
        end: datetime,
        location: Location,
        refracted: bool = True
    ) -> List[Sample]:
        samples: List[Sample] = []
        current = start
        while current < end:
            samples.append((current, self._elevation(current, location, refracted)))
            current += self.step
        samples.append((end, self._elevation(end, location, refracted)))
        return samples

    def _find_transit(self, samples: List[Sample], location: Location) -> Sample:
        """Refine the highest sample to the instant of maximum elevation."""
        index = max(range(len(samples)), key=lambda k: samples[k][1])
        low = samples[max(index - 1, 0)][0]
        high = samples[min(index + 1, len(samples) - 1)][0]

        refined = self._golden_section_maximum(low, high, location)
        if refined[1] < samples[index][1]:
            return samples[index]
        return refined

    def _golden_section_maximum(
        self,
        low: datetime,
        high: datetime,
        location: Location
    ) -> Sample:
        inner_low = high - (high - low) * _GOLDEN_RATIO
        inner_high = low + (high - low) * _GOLDEN_RATIO
        elev_low = self._elevation(inner_low, location)
        elev_high = self._elevation(inner_high, location)

        while (high - low) > self.tolerance:
            if elev_low > elev_high:
                high, inner_high, elev_high = inner_high, inner_low, elev_low
                inner_low = high - (high - low) * _GOLDEN_RATIO
                elev_low = self._elevation(inner_low, location)
            else:
                low, inner_low, elev_low = inner_low, inner_high, elev_high
                inner_high = low + (high - low) * _GOLDEN_RATIO
                elev_high = self._elevation(inner_high, location)

        result = low + (high - low) / 2
        return result, self._elevation(result, location)

    def _find_rising_crossing(
        self,
        morning: List[Sample],
        target_elevation: float,
        location: Location,
        refracted: bool = True
    ) -> Optional[datetime]:
        """Last ascending crossing of the target before transit."""
        for (t0, e0), (t1, e1) in reversed(list(zip(morning, morning[1:]))):
            if e0 < target_elevation <= e1:
                return self._bisect(t0, t1, target_elevation, location, True, refracted)
        return None

    def _find_setting_crossing(
        self,
        evening: List[Sample],
        target_elevation: float,
        location: Location,
        refracted: bool = True
    ) -> Optional[datetime]:
        """First descending crossing of the target after transit."""
        for (t0, e0), (t1, e1) in zip(evening, evening[1:]):
            if e0 >= target_elevation > e1:
                return self._bisect(t0, t1, target_elevation, location, False, refracted)
        return None

    def _bisect(
        self,
        search_start: datetime,
        search_end: datetime,
        target_elevation: float,
        location: Location,
        rising: bool,
        refracted: bool = True
    ) -> datetime:
        """
        Narrow a bracketing interval down to the crossing instant.

        Args:
            search_start: Interval start (elevation on the pre-crossing side)
            search_end: Interval end (elevation on the post-crossing side)
            target_elevation: Elevation being crossed
            location: Observer location
            rising: True for an ascending crossing, False for descending
            refracted: Search the apparent (True) or geometric (False) curve

        Returns:
            Midpoint of the final interval, within ``tolerance`` of the crossing
        """
        while (search_end - search_start) > self.tolerance:
            mid = search_start + (search_end - search_start) / 2
            mid_elev = self._elevation(mid, location, refracted)

            if rising:
                # Looking for sun to rise to target
                if mid_elev < target_elevation:
                    search_start = mid
                else:
                    search_end = mid
            else:
                # Looking for sun to descend to target
                if mid_elev >= target_elevation:
                    search_start = mid
                else:
                    search_end = mid

        return search_start + (search_end - search_start) / 2
