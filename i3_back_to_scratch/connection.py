"""i3 IPC boundary: event subscription and command channel.

Two independent i3ipc.aio connections are used, one subscribed to events and
one for commands, so command replies never interleave with event
notifications on the same socket.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from i3ipc import aio
from i3ipc.events import IpcBaseEvent, WindowEvent, WorkspaceEvent

from .constants import FOCUS_CHANGE, SUBSCRIBED_EVENTS
from .errors import CommandError, EventStreamError, I3ConnectError
from .models import (
    FocusEvent,
    WindowDescriptor,
    WindowFocusChanged,
    WorkspaceDescriptor,
    WorkspaceFocusChanged,
)

logger = logging.getLogger(__name__)


async def connect_i3(purpose: str, socket_path: Optional[str] = None) -> aio.Connection:
    """Open an i3/Sway IPC connection without auto-reconnect.

    Args:
        purpose: Label used in logs and errors ("events" or "commands")
        socket_path: Explicit IPC socket; None lets i3ipc discover it

    Raises:
        I3ConnectError: If the socket cannot be found or connected to
    """
    try:
        conn = await aio.Connection(socket_path=socket_path, auto_reconnect=False).connect()
        version = await conn.get_version()
    except Exception as e:
        raise I3ConnectError(purpose, str(e)) from e

    logger.info(f"Connected to i3 version {version.human_readable} ({purpose} connection)")
    return conn


def translate_event(event: IpcBaseEvent):
    """Map a raw i3ipc event to a focus event.

    Returns:
        WindowFocusChanged / WorkspaceFocusChanged for focus changes, None for
        other changes of a subscribed type, and the raw event for any event
        type outside the subscription (left for the tracker to reject).
    """
    if isinstance(event, WindowEvent):
        if event.change != FOCUS_CHANGE:
            return None
        return WindowFocusChanged(WindowDescriptor.from_container(event.container))

    if isinstance(event, WorkspaceEvent):
        if event.change != FOCUS_CHANGE:
            return None
        current = event.current
        return WorkspaceFocusChanged(
            WorkspaceDescriptor.from_container(current) if current is not None else None
        )

    return event


class I3EventSource:
    """Ordered stream of focus events from a subscribed i3 connection."""

    def __init__(self, conn: aio.Connection) -> None:
        """Initialize event source.

        Args:
            conn: Connection dedicated to the event subscription
        """
        self.conn = conn
        self._queue: asyncio.Queue = asyncio.Queue()

    async def subscribe(self) -> None:
        """Register handlers and subscribe to window and workspace events.

        Must be called before events() is iterated.
        """
        for event_type in SUBSCRIBED_EVENTS:
            self.conn.on(event_type, self._enqueue)

        # i3ipc.aio does not subscribe on on(); request it explicitly
        await self.conn.subscribe(list(SUBSCRIBED_EVENTS))
        logger.info("Subscribed to i3 IPC event stream (window, workspace)")

    def _enqueue(self, conn: aio.Connection, event: IpcBaseEvent) -> None:
        # i3ipc schedules each handler call with ensure_future; FIFO scheduling
        # keeps the queue in arrival order
        focus_event = translate_event(event)
        if focus_event is not None:
            self._queue.put_nowait(focus_event)

    async def events(self) -> AsyncIterator[FocusEvent]:
        """Yield focus events in arrival order until the connection ends.

        Raises:
            EventStreamError: When the i3 main loop finishes or fails
        """
        main_task = asyncio.ensure_future(self.conn.main())
        getter = None
        try:
            while True:
                getter = asyncio.ensure_future(self._queue.get())
                done, _ = await asyncio.wait(
                    {getter, main_task}, return_when=asyncio.FIRST_COMPLETED
                )
                if getter in done:
                    yield getter.result()
                    continue

                getter.cancel()
                if not self._queue.empty():
                    # Drain events that arrived before the connection ended
                    continue

                error = main_task.exception()
                if error is not None:
                    raise EventStreamError(str(error) or type(error).__name__) from error
                raise EventStreamError("connection closed")
        finally:
            if getter is not None and not getter.done():
                getter.cancel()
            if not main_task.done():
                self.conn.main_quit()
                main_task.cancel()


class I3CommandSink:
    """Runs i3 commands over a dedicated connection."""

    def __init__(self, conn: aio.Connection) -> None:
        """Initialize command sink.

        Args:
            conn: Connection dedicated to sending commands
        """
        self.conn = conn

    async def send(self, command: str) -> None:
        """Run a command and wait for i3's acknowledgement.

        A reply with success=false (e.g. the window was closed in the meantime)
        is logged and ignored; only transport failures are fatal.

        Raises:
            CommandError: If the socket fails or i3 sends no reply
        """
        logger.debug(f"Executing command: {command}")
        try:
            replies = await self.conn.command(command)
        except (OSError, EOFError) as e:
            raise CommandError(command, str(e) or type(e).__name__) from e

        if not replies:
            raise CommandError(command, "empty reply")

        for reply in replies:
            if not reply.success:
                logger.warning(
                    f"i3 rejected command '{command}': {getattr(reply, 'error', None) or 'unknown error'}"
                )
