"""
Timezone Lookup Tool: coordinates to IANA timezone.

Golden hour times are reported on the local clock, and the local day starts
at local midnight, so every calculation needs the observer's timezone. This
tool resolves it offline from the coordinates with `timezonefinder`.

The lookup never fails: points with no zone (open ocean on older datasets,
invalid coordinates) fall back to UTC.

The resolver is built once at startup and passed to whoever needs it, since
loading the timezone polygons is comparatively slow.
"""

import logging
from datetime import tzinfo
from typing import Optional, Tuple

import pytz
from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)

FALLBACK_TIMEZONE = "UTC"


def load_timezone(name: Optional[str]) -> Tuple[tzinfo, str]:
    """
    Load a pytz timezone by IANA name.

    Args:
        name: IANA identifier such as "Europe/London"

    Returns:
        Tuple of (tzinfo, resolved name); UTC when the name is empty or unknown
    """
    if not name:
        return pytz.UTC, FALLBACK_TIMEZONE

    try:
        return pytz.timezone(name), name
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone '{name}', falling back to {FALLBACK_TIMEZONE}")
        return pytz.UTC, FALLBACK_TIMEZONE


class TimezoneResolver:
    """
    Resolves the IANA timezone for a coordinate pair.

    Attributes:
        finder: timezonefinder lookup structure (injectable for tests)
    """

    def __init__(self, finder: Optional[TimezoneFinder] = None):
        self.finder = finder if finder is not None else TimezoneFinder()
        logger.info("TimezoneResolver initialized")

    def resolve(self, latitude: float, longitude: float) -> str:
        """
        Get the timezone name for a location.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            IANA timezone identifier, or "UTC" if none can be determined
        """
        try:
            name = self.finder.timezone_at(lng=longitude, lat=latitude)
        except ValueError as e:
            logger.warning(f"Timezone lookup failed for ({latitude}, {longitude}): {e}")
            return FALLBACK_TIMEZONE

        if not name:
            logger.debug(f"No timezone at ({latitude}, {longitude}), using {FALLBACK_TIMEZONE}")
            return FALLBACK_TIMEZONE

        return name
