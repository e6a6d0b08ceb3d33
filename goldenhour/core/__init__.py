"""
Core domain package: value objects and error types shared by the
physics engines, the timezone tool and the HTTP layer.
"""

from .exceptions import GoldenHourError, SolarCalculationError
from .models import (
    ElevationThresholds,
    Location,
    SolarPosition,
    SunEvent,
    SunTimes,
    TimeRange,
    format_duration,
    format_time,
)

__all__ = [
    "GoldenHourError",
    "SolarCalculationError",
    "ElevationThresholds",
    "Location",
    "SolarPosition",
    "SunEvent",
    "SunTimes",
    "TimeRange",
    "format_duration",
    "format_time",
]
