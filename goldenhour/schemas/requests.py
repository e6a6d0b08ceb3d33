"""
Request Schemas for the Golden Hour API.

This module defines Pydantic models for validating incoming API requests.
Coordinates are range-checked here, so the engines behind the API can trust
them.
"""

from pydantic import BaseModel, Field
from typing import Optional


class SunTimesRequest(BaseModel):
    """
    Request model for golden hour and blue hour calculation.

    Threshold overrides are clamped to their supported ranges rather than
    rejected: golden elevation to [0, 15], blue start to [-6, 0], blue end
    to [-18, -6], and blue end is moved to blue start - 4 if it ends up
    above blue start.

    Attributes:
        latitude: GPS latitude (-90 to 90), configured default when omitted
        longitude: GPS longitude (-180 to 180), given together with latitude
        elevation_m: Observer elevation in meters (default 0, or the
            configured elevation for the default location)
        date: Target date (YYYY-MM-DD), defaults to today
        timezone: IANA timezone, resolved from coordinates when omitted
        location_name: Optional human-readable location name
        golden_elevation: Override for the golden hour elevation
        blue_start: Override for the blue hour start elevation
        blue_end: Override for the blue hour end elevation
        use_24_hour: Override for the 12/24-hour display preference
        include_current_position: Include current sun position in response
    """
    latitude: Optional[float] = Field(
        default=None,
        ge=-90.0,
        le=90.0,
        description="GPS latitude in decimal degrees (default: configured location)",
        examples=[51.5074, 78.2232]
    )
    longitude: Optional[float] = Field(
        default=None,
        ge=-180.0,
        le=180.0,
        description="GPS longitude in decimal degrees (default: configured location)",
        examples=[-0.1278, 15.6267]
    )
    elevation_m: Optional[float] = Field(
        default=None,
        ge=-500.0,
        le=9000.0,
        description="Observer elevation in meters",
        examples=[0.0, 11.0, 1868.0]
    )
    date: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Target date in YYYY-MM-DD format (default: today)",
        examples=["2026-01-02", "2026-06-21"]
    )
    timezone: Optional[str] = Field(
        default=None,
        max_length=64,
        description="IANA timezone identifier",
        examples=["Europe/London", "Arctic/Longyearbyen"]
    )
    location_name: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Human-readable location name",
        examples=["London", "Longyearbyen"]
    )
    golden_elevation: Optional[float] = Field(
        default=None,
        description="Golden hour elevation in degrees (clamped to 0..15)"
    )
    blue_start: Optional[float] = Field(
        default=None,
        description="Blue hour start elevation in degrees (clamped to -6..0)"
    )
    blue_end: Optional[float] = Field(
        default=None,
        description="Blue hour end elevation in degrees (clamped to -18..-6)"
    )
    use_24_hour: Optional[bool] = Field(
        default=None,
        description="Format local times as 24-hour clock"
    )
    include_current_position: bool = Field(
        default=False,
        description="Include current sun position in response"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "latitude": 51.5074,
                "longitude": -0.1278,
                "elevation_m": 11.0,
                "date": "2026-01-02",
                "timezone": "Europe/London",
                "location_name": "London",
                "golden_elevation": 6.0,
                "blue_start": -4.0,
                "blue_end": -8.0,
                "use_24_hour": True,
                "include_current_position": False
            }
        }
