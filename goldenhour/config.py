"""
Configuration settings for the Golden Hour service.

This module defines all configuration parameters using Pydantic Settings,
enabling environment variable overrides for production deployment.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache

from .core.models import ElevationThresholds, Location


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        APP_NAME: Application identifier
        APP_VERSION: Semantic version
        DEBUG: Enable debug mode

        # Elevation thresholds (degrees)
        GOLDEN_HOUR_ELEVATION: Sun elevation ending morning golden hour
        BLUE_HOUR_START: Blue hour bound nearer the horizon
        BLUE_HOUR_END: Blue hour bound further below the horizon
        TIME_FORMAT_24_HOUR: Display times as 15:04 rather than 3:04 PM

        # Solar calculation
        SOLAR_POSITION_METHOD: "astral", "pysolar" or "auto"
        SEARCH_STEP_MINUTES: Sampling step of the elevation curve
        SEARCH_TOLERANCE_SECONDS: Precision of event instants

        # API Configuration
        API_V1_PREFIX: API version prefix
        HOST: Server host
        PORT: Server port
    """

    # Application
    APP_NAME: str = "Golden Hour Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Elevation thresholds
    GOLDEN_HOUR_ELEVATION: float = 6.0
    BLUE_HOUR_START: float = -4.0
    BLUE_HOUR_END: float = -8.0
    TIME_FORMAT_24_HOUR: bool = True

    # Solar calculation
    SOLAR_POSITION_METHOD: str = "astral"
    SEARCH_STEP_MINUTES: float = 10.0
    SEARCH_TOLERANCE_SECONDS: float = 1.0

    # Default location (London)
    DEFAULT_LATITUDE: float = 51.5074
    DEFAULT_LONGITUDE: float = -0.1278
    DEFAULT_ELEVATION_M: float = 11.0
    DEFAULT_LOCATION_NAME: str = "London, United Kingdom"
    DEFAULT_TIMEZONE: str = "Europe/London"

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow extra fields in .env

    def elevation_thresholds(self) -> ElevationThresholds:
        """Configured thresholds, clamped to their supported ranges."""
        return ElevationThresholds(
            golden_elevation=self.GOLDEN_HOUR_ELEVATION,
            blue_start=self.BLUE_HOUR_START,
            blue_end=self.BLUE_HOUR_END,
        ).validated()

    def default_location(self) -> Location:
        return Location(
            latitude=self.DEFAULT_LATITUDE,
            longitude=self.DEFAULT_LONGITUDE,
            elevation=self.DEFAULT_ELEVATION_M,
            name=self.DEFAULT_LOCATION_NAME,
            timezone=self.DEFAULT_TIMEZONE,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings factory.

    Returns:
        Settings: Application configuration singleton
    """
    return Settings()


# Global settings instance
settings = get_settings()
