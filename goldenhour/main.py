"""
Golden Hour Service: FastAPI Application Entry Point.

This module exposes the golden hour engine over HTTP.

Architecture:
    The engine and the timezone resolver are built once in the application
    lifespan and stored on ``app.state``; endpoints receive them through
    FastAPI dependencies. Endpoints are plain functions, so FastAPI runs the
    CPU-bound calculations in its threadpool.

Endpoints:
    - GET  /api/v1/health: Service health check
    - POST /api/v1/sun-times: Sunrise, sunset, golden hour and blue hour
    - GET  /api/v1/sun-position: Current sun position and light quality
    - GET  /api/v1/timezone: Timezone resolved from coordinates
"""

import logging
from contextlib import asynccontextmanager
from datetime import date as date_type
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request

from .config import settings
from .core.exceptions import SolarCalculationError
from .core.models import (
    ElevationThresholds,
    Location,
    SolarPosition,
    SunTimes,
    TimeRange,
    format_time,
)
from .physics import GoldenHourEngine, SolarPositionCalculator, SunEventEngine
from .schemas import (
    CalculationMetadata,
    HealthResponse,
    LocationInfo,
    SolarPositionResponse,
    SunTimesRequest,
    SunTimesResponse,
    ThresholdsInfo,
    TimeRangeResponse,
    TimezoneResponse,
)
from .tools import TimezoneResolver

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_engine(timezone_resolver: Optional[TimezoneResolver] = None) -> GoldenHourEngine:
    """Assemble the golden hour engine from settings."""
    event_engine = SunEventEngine(
        SolarPositionCalculator(settings.SOLAR_POSITION_METHOD),
        step_minutes=settings.SEARCH_STEP_MINUTES,
        tolerance_seconds=settings.SEARCH_TOLERANCE_SECONDS,
    )
    return GoldenHourEngine(
        event_engine=event_engine,
        thresholds=settings.elevation_thresholds(),
        timezone_resolver=timezone_resolver,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup/shutdown events.

    Startup:
        - Load timezone polygons
        - Build the golden hour engine
    """
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    timezone_resolver = TimezoneResolver()
    app.state.timezone_resolver = timezone_resolver
    app.state.engine = build_engine(timezone_resolver)

    logger.info(f"{settings.APP_NAME} ready on port {settings.PORT}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Golden Hour Service

    Sunrise, sunset, solar noon, golden hour and blue hour for any location,
    computed from the sun's elevation angle.

    - **Golden Hour**: sun between 0° and the golden elevation (default 6°)
    - **Blue Hour**: sun between the blue start and blue end elevations
      (default -4° and -8°)

    Windows that do not occur on a date (e.g. blue hour in polar summer) are
    returned with `is_valid: false` and displayed as "N/A".
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


def get_engine(request: Request) -> GoldenHourEngine:
    return request.app.state.engine


def get_timezone_resolver(request: Request) -> TimezoneResolver:
    return request.app.state.timezone_resolver


# =============================================================================
# REQUEST / RESPONSE BUILDERS
# =============================================================================

def build_request_location(request: SunTimesRequest) -> Location:
    """
    Observer location for a sun-times request.

    Without coordinates the configured default location is used; name,
    elevation and timezone in the request still override its values.
    """
    if request.latitude is None and request.longitude is None:
        default = settings.default_location()
        return Location(
            latitude=default.latitude,
            longitude=default.longitude,
            elevation=request.elevation_m if request.elevation_m is not None else default.elevation,
            name=request.location_name or default.name,
            timezone=request.timezone or default.timezone,
        )

    if request.latitude is None or request.longitude is None:
        raise HTTPException(
            status_code=400,
            detail="latitude and longitude must be given together"
        )

    return Location(
        latitude=request.latitude,
        longitude=request.longitude,
        elevation=request.elevation_m if request.elevation_m is not None else 0.0,
        name=request.location_name or "",
        timezone=request.timezone,
    )


def build_time_range(time_range: TimeRange, use_24_hour: bool) -> TimeRangeResponse:
    minutes = time_range.duration_minutes()
    return TimeRangeResponse(
        start=time_range.start.isoformat() if time_range.start else None,
        end=time_range.end.isoformat() if time_range.end else None,
        start_local=format_time(time_range.start, use_24_hour),
        end_local=format_time(time_range.end, use_24_hour),
        duration_minutes=round(minutes, 1) if minutes is not None else None,
        duration_display=time_range.format_duration(),
        display=time_range.format(use_24_hour),
        is_valid=time_range.is_valid(),
    )


def build_solar_position(position: SolarPosition, use_24_hour: bool) -> SolarPositionResponse:
    return SolarPositionResponse(
        timestamp=position.timestamp.isoformat(),
        local_time=format_time(position.timestamp, use_24_hour),
        elevation_deg=round(position.elevation, 2),
        azimuth_deg=round(position.azimuth, 2),
        is_daylight=position.is_daylight,
        light_quality=position.light_quality,
        is_golden_hour=position.is_golden_hour,
        is_blue_hour=position.is_blue_hour,
        calculation_method=position.calculation_method,
    )


def collect_warnings(sun_times: SunTimes) -> List[str]:
    """Human-readable notes about events that do not occur."""
    warnings = []
    if sun_times.sunrise is None:
        warnings.append("The sun does not cross the horizon before solar noon on this date")
    if sun_times.sunset is None:
        warnings.append("The sun does not cross the horizon after solar noon on this date")
    if not sun_times.has_valid_golden_hour():
        warnings.append("No golden hour on this date at this location")
    if not sun_times.has_valid_blue_hour():
        warnings.append("No blue hour on this date at this location")
    return warnings


def build_sun_times_response(
    sun_times: SunTimes,
    use_24_hour: bool,
    precision_estimate_deg: float
) -> SunTimesResponse:
    location = sun_times.location
    day_length = sun_times.day_length()

    return SunTimesResponse(
        location=LocationInfo(
            name=location.name or "Custom Location",
            latitude=location.latitude,
            longitude=location.longitude,
            elevation_m=location.elevation,
            timezone=sun_times.timezone,
        ),
        date=sun_times.date.isoformat(),
        timezone=sun_times.timezone,
        sunrise=format_time(sun_times.sunrise, use_24_hour),
        sunset=format_time(sun_times.sunset, use_24_hour),
        solar_noon=format_time(sun_times.solar_noon, use_24_hour),
        solar_noon_elevation_deg=(
            round(sun_times.solar_noon_elevation, 2)
            if sun_times.solar_noon_elevation is not None else None
        ),
        golden_morning=build_time_range(sun_times.golden_morning, use_24_hour),
        golden_evening=build_time_range(sun_times.golden_evening, use_24_hour),
        blue_morning=build_time_range(sun_times.blue_morning, use_24_hour),
        blue_evening=build_time_range(sun_times.blue_evening, use_24_hour),
        has_valid_golden_hour=sun_times.has_valid_golden_hour(),
        has_valid_blue_hour=sun_times.has_valid_blue_hour(),
        day_length_hours=(
            round(day_length.total_seconds() / 3600, 2) if day_length is not None else None
        ),
        thresholds=ThresholdsInfo(**sun_times.thresholds.to_dict()),
        metadata=CalculationMetadata(
            calculation_method=sun_times.calculation_method,
            precision_estimate_deg=precision_estimate_deg,
            use_24_hour=use_24_hour,
        ),
        warnings=collect_warnings(sun_times),
    )


# =============================================================================
# HEALTH CHECK
# =============================================================================

@app.get(
    f"{settings.API_V1_PREFIX}/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Service health check"
)
def health_check(engine: GoldenHourEngine = Depends(get_engine)):
    """Report service status and the configured solar algorithm."""
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        components={
            "golden_hour_engine": engine.calculation_method,
            "timezone_resolver": "available" if engine.timezone_resolver else "unavailable",
        }
    )


# =============================================================================
# GOLDEN HOUR ENDPOINTS
# =============================================================================

@app.post(
    f"{settings.API_V1_PREFIX}/sun-times",
    response_model=SunTimesResponse,
    tags=["Golden Hour"],
    summary="Calculate golden hour and blue hour",
    description="""
    Calculate sunrise, sunset, solar noon and the golden hour and blue hour
    windows for a location and date.

    Times are reported in the location's timezone, resolved from the
    coordinates unless given explicitly. Without coordinates the configured
    default location is used. Threshold overrides are clamped to their
    supported ranges.
    """
)
def calculate_sun_times(
    request: SunTimesRequest,
    engine: GoldenHourEngine = Depends(get_engine)
):
    """
    Golden hour calculation endpoint.

    Args:
        request: SunTimesRequest with coordinates, date and thresholds

    Returns:
        SunTimesResponse with complete solar timing data
    """
    try:
        location = build_request_location(request)
        tz, tz_name = engine.resolve_timezone(location)
        location = location.with_timezone(tz_name)

        # Parse date
        if request.date:
            try:
                target_date = date_type.fromisoformat(request.date)
            except ValueError:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid date: {request.date}. Use YYYY-MM-DD."
                )
        else:
            target_date = datetime.now(tz).date()

        base = engine.thresholds
        thresholds = ElevationThresholds(
            golden_elevation=(
                request.golden_elevation if request.golden_elevation is not None
                else base.golden_elevation
            ),
            blue_start=request.blue_start if request.blue_start is not None else base.blue_start,
            blue_end=request.blue_end if request.blue_end is not None else base.blue_end,
        ).validated()

        use_24_hour = (
            request.use_24_hour if request.use_24_hour is not None
            else settings.TIME_FORMAT_24_HOUR
        )

        sun_times = engine.calculate(location, target_date, thresholds)
        response = build_sun_times_response(
            sun_times,
            use_24_hour,
            engine.position_calculator.precision_estimate(location),
        )

        if request.include_current_position:
            current = engine.get_current_position(location, thresholds=thresholds)
            response.current_position = build_solar_position(current, use_24_hour)

        return response

    except HTTPException:
        raise
    except SolarCalculationError as e:
        logger.warning(f"Sun times calculation failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Sun times calculation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get(
    f"{settings.API_V1_PREFIX}/sun-position",
    response_model=SolarPositionResponse,
    tags=["Golden Hour"],
    summary="Get current sun position",
    description="Get the current sun position and light quality for any location."
)
def get_sun_position(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    elevation_m: float = Query(0.0, ge=-500.0, le=9000.0),
    timezone: Optional[str] = Query(None, max_length=64),
    engine: GoldenHourEngine = Depends(get_engine)
):
    """Real-time sun position endpoint."""
    try:
        location = Location(
            latitude=latitude,
            longitude=longitude,
            elevation=elevation_m,
            timezone=timezone,
        )
        position = engine.get_current_position(location)
        return build_solar_position(position, settings.TIME_FORMAT_24_HOUR)

    except SolarCalculationError as e:
        logger.warning(f"Sun position calculation failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Sun position error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get(
    f"{settings.API_V1_PREFIX}/timezone",
    response_model=TimezoneResponse,
    tags=["Tools"],
    summary="Resolve timezone from coordinates"
)
def resolve_timezone(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    timezone_resolver: TimezoneResolver = Depends(get_timezone_resolver)
):
    """Timezone lookup endpoint (falls back to UTC)."""
    return TimezoneResponse(
        latitude=latitude,
        longitude=longitude,
        timezone=timezone_resolver.resolve(latitude, longitude),
    )
