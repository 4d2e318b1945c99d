"""Focus tracking state machine.

Watches window and workspace focus changes and sends the tracked window
back to the scratchpad the moment it loses focus:

- window::focus on a different window while the tracked window was focused
- workspace::focus onto an empty workspace while the tracked window was
  focused (no window::focus fires in that case, there is nothing to focus)

The tracker is driven by a single task; each event is handled to completion,
including the command round-trip, before the next one is taken.
"""

import logging
from typing import Optional, Protocol

from .classifier import is_tracked_window
from .errors import UnexpectedEventError
from .models import (
    OTHER,
    FocusEvent,
    FocusState,
    RelocationCommand,
    TrackedFocused,
    WindowDescriptor,
    WindowFocusChanged,
    WorkspaceDescriptor,
    WorkspaceFocusChanged,
)

logger = logging.getLogger(__name__)


class CommandSink(Protocol):
    """Anything that can run an i3 command, raising CommandError on failure."""

    async def send(self, command: str) -> None:
        ...


class FocusTracker:
    """Tracks the last focused window and relocates the tracked one."""

    def __init__(self, tracked_class: str, sink: CommandSink) -> None:
        """Initialize focus tracker.

        Args:
            tracked_class: Window class (or app_id) to send back to the scratchpad
            sink: Command channel used for relocation commands
        """
        self.tracked_class = tracked_class
        self.sink = sink
        self._last_focused: FocusState = OTHER

    @property
    def last_focused(self) -> FocusState:
        return self._last_focused

    async def handle_event(self, event: FocusEvent) -> None:
        """Dispatch one event from the subscription.

        Raises:
            UnexpectedEventError: If the event is neither a window nor a workspace focus change
            CommandError: If a relocation command fails
        """
        match event:
            case WindowFocusChanged(window=window):
                await self.handle_window_focus(window)
            case WorkspaceFocusChanged(current=current):
                await self.handle_workspace_focus(current)
            case _:
                raise UnexpectedEventError(event)

    async def handle_window_focus(self, window: WindowDescriptor) -> None:
        """Handle window::focus.

        The state is only updated after the relocation command succeeded, so a
        failed command leaves last_focused untouched.
        """
        match self._last_focused:
            case TrackedFocused(window_id=window_id) if window_id != window.id:
                logger.debug(f"Tracked window {window_id} lost focus to window {window.id}")
                await self._move_to_scratchpad(window_id)

        if is_tracked_window(window, self.tracked_class):
            self._last_focused = TrackedFocused(window.id)
        else:
            self._last_focused = OTHER
        logger.debug(f"Focus state: {self._last_focused} (window {window.id}, class {window.window_class!r})")

    async def handle_workspace_focus(self, workspace: Optional[WorkspaceDescriptor]) -> None:
        """Handle workspace::focus.

        Only an empty workspace counts; any window on a non-empty workspace
        will report its own window::focus.
        """
        if workspace is None or not workspace.is_empty:
            return

        match self._last_focused:
            case TrackedFocused(window_id=window_id):
                logger.debug(f"Switched to empty workspace '{workspace.name}' from tracked window {window_id}")
                await self._move_to_scratchpad(window_id)
                self._last_focused = OTHER

    async def _move_to_scratchpad(self, window_id: int) -> None:
        command = RelocationCommand(window_id=window_id).to_sway_command()
        await self.sink.send(command)
        logger.info(f"Sent window {window_id} back to scratchpad")
