#!/usr/bin/env python3
"""
Golden Hour Service Runner.

Host, port and log level default to the application settings (environment
variables or ``.env``, see ``goldenhour.config``); command-line flags
override them for a single run.

Usage:
    python run.py                            # development, auto-reload
    python run.py --production --workers 4   # production
    python run.py --port 9000                # one-off port override
"""

import argparse
from typing import Any, Dict, List, Optional

import uvicorn

from goldenhour.config import settings

APP_IMPORT_PATH = "goldenhour.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.APP_NAME} server")
    parser.add_argument(
        "--production",
        action="store_true",
        help="Run without auto-reload, with multiple workers"
    )
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (production only)"
    )
    return parser


def uvicorn_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Keyword arguments for ``uvicorn.run``."""
    options: Dict[str, Any] = {
        "app": APP_IMPORT_PATH,
        "host": args.host,
        "port": args.port,
        "log_level": "debug" if settings.DEBUG else "info",
    }

    if args.production:
        options["workers"] = args.workers
    else:
        # Reload needs the import string and a single process
        options["reload"] = True
        options["reload_dirs"] = ["goldenhour"]

    return options


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    options = uvicorn_options(args)

    mode = "production" if args.production else "development"
    print(f"Starting {settings.APP_NAME} {settings.APP_VERSION} in {mode} mode")
    print(f"API docs: http://{args.host}:{args.port}/docs")
    print(f"Health:   http://{args.host}:{args.port}{settings.API_V1_PREFIX}/health")

    uvicorn.run(**options)


if __name__ == "__main__":
    main()
