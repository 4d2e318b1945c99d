"""Command-line configuration for the back-to-scratch daemon."""

import argparse
import logging
import os
from typing import Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from . import __version__
from .constants import DEFAULT_LOG_LEVEL


class DaemonConfig(BaseModel):
    """Validated daemon configuration."""

    tracked_class: str = Field(
        ...,
        description="Window class (X11 class or Wayland app_id) to send back to the scratchpad",
        min_length=1,
    )

    log_level: str = Field(
        DEFAULT_LOG_LEVEL,
        description="Root logger level name",
    )

    socket_path: Optional[str] = Field(
        None,
        description="i3/Sway IPC socket path (default: discovered from I3SOCK/SWAYSOCK)",
    )

    @field_validator("tracked_class")
    @classmethod
    def validate_tracked_class(cls, v: str) -> str:
        """Reject blank class names; matching is exact so no stripping is done."""
        if not v.strip():
            raise ValueError("Window class must not be blank")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the daemon.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="i3-back-to-scratch",
        description=(
            "Send windows back to the scratchpad when they lose focus. "
            "Listens for i3 events and moves windows whose class matches CLASS "
            "back to the scratchpad."
        ),
    )

    parser.add_argument(
        "-c",
        "--class",
        dest="tracked_class",
        metavar="CLASS",
        required=True,
        help="The X11 class (or Sway app_id) of the windows to send back to the scratchpad",
    )

    parser.add_argument(
        "-s",
        "--socket",
        dest="socket_path",
        metavar="PATH",
        help="i3/Sway IPC socket path (default: $I3SOCK / $SWAYSOCK)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        help="Log level (default: $LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"i3-back-to-scratch {__version__}",
    )

    return parser


def load_config(argv: Optional[Sequence[str]] = None) -> DaemonConfig:
    """Parse and validate command-line arguments.

    Invalid values are reported through the parser, which exits with status 2.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        return DaemonConfig(
            tracked_class=args.tracked_class,
            log_level="DEBUG" if args.verbose else args.log_level,
            socket_path=args.socket_path,
        )
    except ValidationError as e:
        messages = "; ".join(error["msg"] for error in e.errors())
        parser.error(messages)
