"""
Tests for the timezone lookup tool.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytz

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goldenhour.tools.timezone_lookup import TimezoneResolver, load_timezone


@pytest.fixture(scope="module")
def resolver():
    return TimezoneResolver()


class TestTimezoneResolver:
    """Tests for TimezoneResolver."""

    def test_known_cities(self, resolver):
        assert resolver.resolve(51.5074, -0.1278) == "Europe/London"
        assert resolver.resolve(35.6762, 139.6503) == "Asia/Tokyo"
        assert resolver.resolve(40.7128, -74.0060) == "America/New_York"

    def test_resolved_name_loads(self, resolver):
        tz, name = load_timezone(resolver.resolve(51.5074, -0.1278))
        assert name == "Europe/London"
        assert tz.zone == "Europe/London"

    def test_no_zone_falls_back_to_utc(self):
        finder = MagicMock()
        finder.timezone_at.return_value = None

        assert TimezoneResolver(finder=finder).resolve(0.0, -30.0) == "UTC"
        finder.timezone_at.assert_called_once_with(lng=-30.0, lat=0.0)

    def test_lookup_error_falls_back_to_utc(self):
        finder = MagicMock()
        finder.timezone_at.side_effect = ValueError("The coordinates should be given in degrees")

        assert TimezoneResolver(finder=finder).resolve(95.0, 0.0) == "UTC"


class TestLoadTimezone:
    """Tests for load_timezone."""

    def test_known_name(self):
        tz, name = load_timezone("Asia/Tokyo")
        assert name == "Asia/Tokyo"
        assert tz.zone == "Asia/Tokyo"

    def test_unknown_name(self):
        tz, name = load_timezone("Mars/Olympus_Mons")
        assert name == "UTC"
        assert tz == pytz.UTC

    def test_empty_name(self):
        assert load_timezone(None) == (pytz.UTC, "UTC")
        assert load_timezone("") == (pytz.UTC, "UTC")
