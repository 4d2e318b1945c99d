"""Pytest configuration and shared fixtures for back-to-scratch tests."""

import sys
from pathlib import Path
from typing import List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
from i3ipc.aio import Connection

# Make the package importable from a plain checkout, before test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from i3_back_to_scratch.errors import CommandError, EventStreamError  # noqa: E402


def make_window_con(
    con_id: int,
    window_class: Optional[str] = None,
    app_id: Optional[str] = None,
) -> Mock:
    """Mock i3ipc Con for a window container."""
    container = Mock(
        id=con_id,
        app_id=app_id,
        window_class=window_class,
        window_properties={"class": window_class} if window_class else None,
    )
    return container


def make_workspace_con(name: str = "1", num: int = 1, nodes=(), floating_nodes=()) -> Mock:
    """Mock i3ipc Con for a workspace container."""
    workspace = Mock(
        num=num,
        nodes=[Mock(id=node_id) for node_id in nodes],
        floating_nodes=[Mock(id=node_id) for node_id in floating_nodes],
    )
    # Mock() reserves the name keyword
    workspace.name = name
    return workspace


def con_data(con_id: int, con_type: str = "con", name: Optional[str] = None, **extra) -> dict:
    """Raw GET_TREE style container payload, as i3 sends it."""
    rect = {"x": 0, "y": 0, "width": 1920, "height": 1080}
    data = {
        "id": con_id,
        "type": con_type,
        "name": name,
        "num": extra.pop("num", None),
        "orientation": "none",
        "layout": "splith",
        "percent": None,
        "border": "normal",
        "current_border_width": 2,
        "rect": rect,
        "window_rect": rect,
        "deco_rect": rect,
        "geometry": rect,
        "window": None,
        "urgent": False,
        "focused": False,
        "focus": [],
        "marks": [],
        "sticky": False,
        "floating": "auto_off",
        "fullscreen_mode": 0,
        "nodes": [],
        "floating_nodes": [],
    }
    data.update(extra)
    return data


class RecordingSink:
    """Command sink that records every command and can be told to fail."""

    def __init__(self) -> None:
        self.commands: List[str] = []
        self.fail_with: Optional[str] = None

    async def send(self, command: str) -> None:
        if self.fail_with is not None:
            raise CommandError(command, self.fail_with)
        self.commands.append(command)


class ScriptedEventSource:
    """Event source replaying a fixed list of events, then failing like a dropped socket."""

    def __init__(self, events) -> None:
        self._events = list(events)

    async def subscribe(self) -> None:
        pass

    async def events(self):
        for event in self._events:
            yield event
        raise EventStreamError("connection closed")


@pytest.fixture
def sink():
    """Recording command sink."""
    return RecordingSink()


@pytest.fixture
def mock_i3_connection():
    """Mock i3 IPC connection for testing."""
    conn = AsyncMock(spec=Connection)
    conn.command.return_value = [Mock(success=True, error=None)]
    conn.get_version.return_value = Mock(human_readable="4.23 (2023-10-29)")
    return conn


@pytest.fixture
def window_con():
    """Factory for mock window containers."""
    return make_window_con


@pytest.fixture
def workspace_con():
    """Factory for mock workspace containers."""
    return make_workspace_con


@pytest.fixture
def raw_con():
    """Factory for raw i3 container payloads."""
    return con_data


@pytest.fixture
def scripted_source():
    """Factory for event sources replaying a fixed event list."""
    return ScriptedEventSource
