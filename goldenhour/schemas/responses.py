"""
Response Schemas for the Golden Hour API.

This module defines Pydantic models for API responses.
All responses follow a consistent structure for client consumption.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict


class TimeRangeResponse(BaseModel):
    """
    Response model for a time window (golden hour, blue hour).

    An invalid window (one of its events does not happen that day) has
    ``is_valid`` false, null instants and "N/A" as its display text.

    Attributes:
        start: Start time (ISO format)
        end: End time (ISO format)
        start_local: Local start time ("--:--" if absent)
        end_local: Local end time ("--:--" if absent)
        duration_minutes: Window duration in minutes
        duration_display: Duration as "45 min" / "1h 5m"
        display: "start - end", or "N/A"
        is_valid: Both instants present and end after start
    """
    start: Optional[str] = Field(None, description="Start time in ISO format")
    end: Optional[str] = Field(None, description="End time in ISO format")
    start_local: str = Field(..., description="Local start time")
    end_local: str = Field(..., description="Local end time")
    duration_minutes: Optional[float] = Field(None, description="Duration in minutes")
    duration_display: str = Field(..., description="Human-readable duration")
    display: str = Field(..., description="Display text for the window")
    is_valid: bool = Field(..., description="Whether the window exists on this date")


class LocationInfo(BaseModel):
    """Location information used for the calculation."""
    name: str
    latitude: float
    longitude: float
    elevation_m: float
    timezone: str


class ThresholdsInfo(BaseModel):
    """Elevation thresholds applied (after clamping)."""
    golden_elevation_deg: float
    blue_start_deg: float
    blue_end_deg: float


class CalculationMetadata(BaseModel):
    """Metadata about the calculation."""
    calculation_method: str = Field(..., description="Algorithm used (astral/pysolar)")
    precision_estimate_deg: float = Field(..., description="Estimated precision in degrees")
    use_24_hour: bool = Field(..., description="Clock format of local times")


class SolarPositionResponse(BaseModel):
    """
    Response model for current sun position.

    Attributes:
        timestamp: Timestamp in the location's timezone (ISO format)
        local_time: Local time string
        elevation_deg: Sun elevation above horizon (degrees)
        azimuth_deg: Sun compass bearing (0=N, 90=E, 180=S, 270=W)
        is_daylight: Whether the sun is above the horizon
        light_quality: Current lighting classification
        is_golden_hour: Sun between 0° and the golden elevation
        is_blue_hour: Sun between the blue hour elevations
        calculation_method: Algorithm used for calculation
    """
    timestamp: str = Field(..., description="Timestamp (ISO format)")
    local_time: str = Field(..., description="Local time")
    elevation_deg: float = Field(..., description="Sun elevation (degrees, negative = below horizon)")
    azimuth_deg: float = Field(..., description="Sun compass bearing (degrees)")
    is_daylight: bool = Field(..., description="True if sun above horizon")
    light_quality: str = Field(
        ...,
        description="Lighting quality: harsh, daylight, golden, transitional, blue, dark"
    )
    is_golden_hour: bool
    is_blue_hour: bool
    calculation_method: str = Field(..., description="Algorithm used")


class SunTimesResponse(BaseModel):
    """
    Response model for the golden hour and blue hour calculation.

    Attributes:
        location: Location details
        date: Calculation date
        timezone: Timezone of all local times
        sunrise: Local sunrise time ("--:--" if the sun does not rise)
        sunset: Local sunset time ("--:--" if the sun does not set)
        solar_noon: Local solar noon time
        solar_noon_elevation_deg: Sun elevation at solar noon
        golden_morning: Morning golden hour window
        golden_evening: Evening golden hour window
        blue_morning: Morning blue hour window
        blue_evening: Evening blue hour window
        has_valid_golden_hour: Either golden window exists
        has_valid_blue_hour: Either blue window exists
        day_length_hours: Daylight duration
        thresholds: Elevation thresholds applied
        current_position: Current sun position (if requested)
        metadata: Calculation metadata
        warnings: Any calculation warnings
    """
    location: LocationInfo
    date: str = Field(..., description="Calculation date (YYYY-MM-DD)")
    timezone: str = Field(..., description="Timezone used")

    # Key Solar Events
    sunrise: str = Field(..., description="Sunrise time")
    sunset: str = Field(..., description="Sunset time")
    solar_noon: str = Field(..., description="Solar noon time")
    solar_noon_elevation_deg: Optional[float] = Field(
        None,
        description="Maximum sun elevation at solar noon"
    )

    # Golden Hour Windows
    golden_morning: TimeRangeResponse
    golden_evening: TimeRangeResponse

    # Blue Hour Windows
    blue_morning: TimeRangeResponse
    blue_evening: TimeRangeResponse

    has_valid_golden_hour: bool
    has_valid_blue_hour: bool
    day_length_hours: Optional[float] = Field(None, description="Daylight duration (hours)")
    thresholds: ThresholdsInfo

    # Current Position (optional)
    current_position: Optional[SolarPositionResponse] = Field(
        None,
        description="Current sun position (if requested)"
    )

    metadata: CalculationMetadata
    warnings: List[str] = Field(default_factory=list, description="Calculation warnings")


class TimezoneResponse(BaseModel):
    """Resolved timezone for a coordinate pair."""
    latitude: float
    longitude: float
    timezone: str


class HealthResponse(BaseModel):
    """
    Response model for health check endpoint.

    Attributes:
        status: Service health status
        version: API version
        components: Status of individual components
    """
    status: str = Field(default="healthy")
    version: str
    components: Dict[str, str] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "components": {
                    "golden_hour_engine": "astral",
                    "timezone_resolver": "available"
                }
            }
        }
