"""Shared constants for the back-to-scratch daemon."""

from typing import Final

from i3ipc import Event


# Subscribed event types. Generic WINDOW/WORKSPACE subscriptions; the
# focus changes are picked out by the event source.
SUBSCRIBED_EVENTS: Final[tuple] = (Event.WINDOW, Event.WORKSPACE)

FOCUS_CHANGE: Final[str] = "focus"

MOVE_SCRATCHPAD_TEMPLATE: Final[str] = "[con_id={window_id}] move scratchpad"

SYSLOG_IDENTIFIER: Final[str] = "i3-back-to-scratch"
LOG_FORMAT: Final[str] = "%(levelname)s [%(name)s] %(message)s"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

# Process exit codes
EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_SOFTWARE: Final[int] = 70  # sysexits.h EX_SOFTWARE
