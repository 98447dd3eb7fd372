"""
Task Tracker server launcher.

Usage:
    task-tracker
    task-tracker --port 9000
    task-tracker --host 0.0.0.0 --port 9000 --reload
"""
from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from .logging_setup import setup_logging
from .settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Task Tracker backend")
    parser.add_argument("--host", default=settings.host, help=f"Host to bind (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port to bind (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Console log level (default: {settings.log_level})",
    )
    return parser


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments, configure logging and serve the app with uvicorn."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(console_level=args.log_level, log_file=settings.log_file)

    uvicorn.run(
        "task_tracker.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
