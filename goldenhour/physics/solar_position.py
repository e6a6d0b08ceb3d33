"""
Solar Position Primitive: topocentric sun elevation and azimuth.

Two algorithms are available:

    - astral: NOAA solar calculator formulas with Sæmundsson atmospheric
      refraction. Fast, about 0.5° / one minute of time accuracy.
    - pysolar: NREL Solar Position Algorithm (Reda & Andreas, 2004) with
      refraction and observer elevation. Slower, ~0.0003° accuracy.

The "auto" method uses pysolar for observers above 500 m, where parallax
and horizon geometry matter more, and astral elsewhere.

Both return the apparent (refracted) elevation of the sun's centre by
default, so an elevation of 0° is the instant the centre of the disc appears
on the horizon. With ``with_refraction=False`` they return the geometric
elevation, which is what the standard sunrise convention (-0.833°) is
measured against.

References:
    [1] NOAA Solar Calculator. https://gml.noaa.gov/grad/solcalc/
    [2] Reda, I. & Andreas, A. (2004). Solar Position Algorithm for
        Solar Radiation Applications. NREL/TP-560-34302.
"""

import logging
import math
from datetime import datetime
from typing import Tuple

import pytz
from astral import Observer
from astral.sun import azimuth as astral_azimuth
from astral.sun import elevation as astral_elevation
from pysolar import solar

from ..core.exceptions import SolarCalculationError
from ..core.models import Location

logger = logging.getLogger(__name__)

METHOD_ASTRAL = "astral"
METHOD_PYSOLAR = "pysolar"
METHOD_AUTO = "auto"
SUPPORTED_METHODS = (METHOD_ASTRAL, METHOD_PYSOLAR, METHOD_AUTO)

# Observer elevation above which "auto" switches to pysolar (meters)
HIGH_PRECISION_ELEVATION_THRESHOLD = 500.0

# Upper bound of the SPA validity range (years)
MAX_SUPPORTED_YEAR = 6000

PRECISION_ESTIMATE_DEG = {
    METHOD_ASTRAL: 0.5,
    METHOD_PYSOLAR: 0.0003,
}


def _to_utc(when: datetime) -> datetime:
    if when.tzinfo is None:
        return pytz.UTC.localize(when)
    return when.astimezone(pytz.UTC)


def normalize_coordinates(latitude: float, longitude: float) -> Tuple[float, float]:
    """Clamp latitude to [-90, 90] and wrap longitude to [-180, 180)."""
    latitude = max(min(latitude, 90.0), -90.0)
    longitude = ((longitude + 180.0) % 360.0) - 180.0
    return latitude, longitude


class SolarPositionCalculator:
    """
    Computes where the sun is for an observer at a given instant.

    Stateless apart from the chosen method, so one instance can be shared
    between threads.

    Example:
        >>> calculator = SolarPositionCalculator("astral")
        >>> elevation, azimuth = calculator.position(
        ...     datetime(2026, 6, 21, 12, 0, tzinfo=pytz.UTC),
        ...     Location(latitude=51.5074, longitude=-0.1278),
        ... )
    """

    def __init__(self, method: str = METHOD_ASTRAL):
        if method not in SUPPORTED_METHODS:
            raise ValueError(
                f"Unknown solar position method '{method}', "
                f"expected one of {', '.join(SUPPORTED_METHODS)}"
            )
        self.method = method
        logger.info(f"SolarPositionCalculator initialized with {method} method")

    def resolve_method(self, location: Location) -> str:
        """Concrete algorithm ("astral" or "pysolar") used for a location."""
        if self.method != METHOD_AUTO:
            return self.method
        if location.elevation > HIGH_PRECISION_ELEVATION_THRESHOLD:
            return METHOD_PYSOLAR
        return METHOD_ASTRAL

    def position(self, when: datetime, location: Location) -> Tuple[float, float]:
        """
        Get sun elevation and azimuth.

        Args:
            when: Instant of observation (naive values are taken as UTC)
            location: Observer location

        Returns:
            Tuple of (elevation_deg, azimuth_deg)

        Raises:
            SolarCalculationError: For non-finite coordinates, dates outside
                the algorithm's range, or a failure inside the library
        """
        return self._compute(when, location, with_azimuth=True, with_refraction=True)

    def elevation(
        self,
        when: datetime,
        location: Location,
        with_refraction: bool = True
    ) -> float:
        """Get sun elevation only (the hot path of the event search)."""
        elevation, _ = self._compute(
            when, location, with_azimuth=False, with_refraction=with_refraction
        )
        return elevation

    def precision_estimate(self, location: Location) -> float:
        return PRECISION_ESTIMATE_DEG[self.resolve_method(location)]

    def _compute(
        self,
        when: datetime,
        location: Location,
        with_azimuth: bool,
        with_refraction: bool
    ) -> Tuple[float, float]:
        method = self.resolve_method(location)
        when_utc = self._check_inputs(when, location)
        latitude, longitude = normalize_coordinates(location.latitude, location.longitude)

        azimuth = 0.0
        try:
            if method == METHOD_PYSOLAR:
                # Zero pressure switches off the SPA refraction term
                atmosphere = {} if with_refraction else {"pressure": 0.0}
                elevation = solar.get_altitude(
                    latitude, longitude, when_utc, elevation=location.elevation, **atmosphere
                )
                if with_azimuth:
                    azimuth = solar.get_azimuth(
                        latitude, longitude, when_utc, elevation=location.elevation
                    )
            else:
                observer = Observer(
                    latitude=latitude,
                    longitude=longitude,
                    elevation=location.elevation
                )
                elevation = astral_elevation(
                    observer, when_utc, with_refraction=with_refraction
                )
                if with_azimuth:
                    azimuth = astral_azimuth(observer, when_utc)
        except Exception as e:
            raise SolarCalculationError(
                f"Solar position calculation failed ({method}) at {when_utc.isoformat()}: {e}"
            ) from e

        return float(elevation), float(azimuth) % 360.0

    @staticmethod
    def _check_inputs(when: datetime, location: Location) -> datetime:
        if not (math.isfinite(location.latitude) and math.isfinite(location.longitude)):
            raise SolarCalculationError(
                f"Coordinates must be finite, got ({location.latitude}, {location.longitude})"
            )
        if not math.isfinite(location.elevation):
            raise SolarCalculationError(f"Observer elevation must be finite, got {location.elevation}")

        when_utc = _to_utc(when)
        if when_utc.year > MAX_SUPPORTED_YEAR:
            raise SolarCalculationError(
                f"Year {when_utc.year} is outside the supported range (up to {MAX_SUPPORTED_YEAR})"
            )
        return when_utc
