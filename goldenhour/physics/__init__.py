"""
Golden Hour Physics Engine Package.

This package contains the solar calculations:
- Solar position (astral NOAA formulas or pysolar NREL SPA)
- Elevation-crossing event search (sunrise, transit, sunset, custom angles)
- Golden hour and blue hour window derivation
"""

from .solar_position import SolarPositionCalculator
from .event_engine import CustomSunEvent, SunEventEngine, SunEvents
from .golden_hour_engine import (
    GoldenHourEngine,
    build_custom_events,
    classify_light,
)

__all__ = [
    "SolarPositionCalculator",
    "CustomSunEvent",
    "SunEventEngine",
    "SunEvents",
    "GoldenHourEngine",
    "build_custom_events",
    "classify_light",
]
