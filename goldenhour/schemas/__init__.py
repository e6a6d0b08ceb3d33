"""
Pydantic Schemas for the Golden Hour API.
"""

from .requests import SunTimesRequest
from .responses import (
    TimeRangeResponse,
    LocationInfo,
    ThresholdsInfo,
    CalculationMetadata,
    SolarPositionResponse,
    SunTimesResponse,
    TimezoneResponse,
    HealthResponse,
)

__all__ = [
    # Requests
    "SunTimesRequest",
    # Responses
    "TimeRangeResponse",
    "LocationInfo",
    "ThresholdsInfo",
    "CalculationMetadata",
    "SolarPositionResponse",
    "SunTimesResponse",
    "TimezoneResponse",
    "HealthResponse",
]
