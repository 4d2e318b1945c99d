"""Main daemon entry point with systemd integration.

This module wires the i3 connections, the focus tracker and the run loop,
and provides systemd integration (sd_notify, watchdog, journald logging)
when systemd-python is installed.
"""

import asyncio
import logging
import os
import signal
import sys
from typing import Optional, Sequence

try:
    from systemd import journal, daemon as sd_daemon
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from .config import DaemonConfig, load_config
from .connection import I3CommandSink, I3EventSource, connect_i3
from .constants import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_SOFTWARE,
    LOG_FORMAT,
    SYSLOG_IDENTIFIER,
)
from .errors import BackToScratchError, UnexpectedEventError
from .focus_tracker import FocusTracker

logger = logging.getLogger(__name__)


class DaemonHealthMonitor:
    """Manages systemd health notifications and watchdog pings."""

    def __init__(self) -> None:
        self.watchdog_interval: Optional[float] = None
        self._setup_watchdog()

    def _setup_watchdog(self) -> None:
        """Detect watchdog interval from systemd environment."""
        if not SYSTEMD_AVAILABLE:
            return

        watchdog_usec = os.environ.get("WATCHDOG_USEC")
        if watchdog_usec:
            # Ping at 1/3 of the systemd timeout
            self.watchdog_interval = int(watchdog_usec) / 3_000_000
            logger.info(f"Systemd watchdog enabled: {self.watchdog_interval:.1f}s interval")
        else:
            logger.debug("Systemd watchdog not configured")

    def notify(self, status: str) -> None:
        if SYSTEMD_AVAILABLE:
            sd_daemon.notify(status)
            logger.debug(f"Sent {status} to systemd")

    def notify_ready(self) -> None:
        self.notify("READY=1")

    def notify_stopping(self) -> None:
        self.notify("STOPPING=1")

    async def watchdog_loop(self) -> None:
        """Ping the systemd watchdog until cancelled."""
        if not self.watchdog_interval:
            return

        while True:
            await asyncio.sleep(self.watchdog_interval)
            self.notify("WATCHDOG=1")


class BackToScratchDaemon:
    """Main daemon class."""

    def __init__(self, config: DaemonConfig) -> None:
        """Initialize daemon.

        Args:
            config: Validated daemon configuration
        """
        self.config = config
        self.event_source: Optional[I3EventSource] = None
        self.command_sink: Optional[I3CommandSink] = None
        self.tracker: Optional[FocusTracker] = None
        self.health_monitor = DaemonHealthMonitor()
        self.shutdown_event = asyncio.Event()

    async def initialize(self) -> None:
        """Connect to i3 and build the focus tracker.

        Raises:
            I3ConnectError: If either connection cannot be established
        """
        logger.info(f"Tracking windows of class '{self.config.tracked_class}'")

        command_conn = await connect_i3("commands", self.config.socket_path)
        event_conn = await connect_i3("events", self.config.socket_path)

        self.command_sink = I3CommandSink(command_conn)
        self.event_source = I3EventSource(event_conn)
        await self.event_source.subscribe()

        self.tracker = FocusTracker(self.config.tracked_class, self.command_sink)

    async def run(self) -> None:
        """Feed events to the tracker, one at a time, until the stream fails."""
        self.health_monitor.notify_ready()

        watchdog_task = asyncio.create_task(self.health_monitor.watchdog_loop())
        try:
            async for event in self.event_source.events():
                await self.tracker.handle_event(event)
        finally:
            watchdog_task.cancel()

    def shutdown(self) -> None:
        logger.info("Shutting down daemon...")
        self.health_monitor.notify_stopping()

    def setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def shutdown_handler(signum, frame):
            logger.info(f"Received signal {signum}, initiating shutdown...")
            loop.call_soon_threadsafe(self.shutdown_event.set)

        signal.signal(signal.SIGTERM, shutdown_handler)
        signal.signal(signal.SIGINT, shutdown_handler)


def setup_logging(level: str) -> None:
    """Setup logging to systemd journal or stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER=SYSLOG_IDENTIFIER)
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={level}")


async def main_async(config: DaemonConfig) -> int:
    """Async main function.

    Returns:
        Exit code (0 after a signal-initiated shutdown, non-zero on failure)
    """
    daemon = BackToScratchDaemon(config)

    try:
        daemon.setup_signal_handlers()
        await daemon.initialize()

        run_task = asyncio.create_task(daemon.run())
        shutdown_task = asyncio.create_task(daemon.shutdown_event.wait())

        done, pending = await asyncio.wait(
            [run_task, shutdown_task], return_when=asyncio.FIRST_COMPLETED
        )

        for task in pending:
            task.cancel()

        if run_task in done:
            # The event stream never ends cleanly; this re-raises its failure
            run_task.result()

        daemon.shutdown()
        return EXIT_OK

    except UnexpectedEventError as e:
        logger.critical(
            f"Internal consistency failure: {e}", exc_info=True, extra={"error": e.to_dict()}
        )
        return EXIT_SOFTWARE

    except BackToScratchError as e:
        logger.error(f"Fatal error: {e}", exc_info=True, extra={"error": e.to_dict()})
        if e.suggestion:
            logger.error(e.suggestion)
        return EXIT_FAILURE

    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    config = load_config(argv)
    setup_logging(config.log_level)

    logger.info("i3 back-to-scratch daemon starting...")
    logger.info(f"PID: {os.getpid()}")

    sys.exit(asyncio.run(main_async(config)))


if __name__ == "__main__":
    main()
