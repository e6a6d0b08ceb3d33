"""
Tests for the server runner script.
"""

import sys
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import run
from goldenhour.config import settings


class TestRunner:
    """Tests for the uvicorn options built by run.py."""

    def test_defaults_come_from_settings(self):
        options = run.uvicorn_options(run.build_parser().parse_args([]))

        assert options["host"] == settings.HOST
        assert options["port"] == settings.PORT
        assert options["app"] == "goldenhour.main:app"
        assert options["reload"] is True
        assert "workers" not in options

    def test_log_level_follows_debug(self):
        args = run.build_parser().parse_args([])

        with patch.object(settings, "DEBUG", True):
            assert run.uvicorn_options(args)["log_level"] == "debug"
        with patch.object(settings, "DEBUG", False):
            assert run.uvicorn_options(args)["log_level"] == "info"

    def test_production_mode(self):
        args = run.build_parser().parse_args(["--production", "--workers", "4", "--port", "9000"])
        options = run.uvicorn_options(args)

        assert options["workers"] == 4
        assert options["port"] == 9000
        assert "reload" not in options

    def test_main_starts_uvicorn(self):
        with patch.object(run.uvicorn, "run") as uvicorn_run:
            run.main(["--production"])

        uvicorn_run.assert_called_once()
        assert uvicorn_run.call_args.kwargs["app"] == "goldenhour.main:app"
