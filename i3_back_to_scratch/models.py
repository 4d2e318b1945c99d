"""
Focus tracking models.

Pydantic snapshots of the i3 containers a focus event reports, the
tracker's focus state, and the relocation command it emits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .classifier import get_window_class
from .constants import MOVE_SCRATCHPAD_TEMPLATE


class WindowDescriptor(BaseModel):
    """Window that received focus.

    Attributes:
        id: i3/Sway container ID (con_id), stable for the window's lifetime
        window_class: X11 class, or Wayland app_id on Sway; None if absent
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="i3/Sway container ID")
    window_class: Optional[str] = Field(None, description="Window class or app_id")

    @classmethod
    def from_container(cls, container) -> "WindowDescriptor":
        """Build a descriptor from an i3ipc Con."""
        return cls(id=container.id, window_class=get_window_class(container))


class WorkspaceDescriptor(BaseModel):
    """Snapshot of a freshly focused workspace."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Workspace name")
    num: Optional[int] = Field(None, description="Workspace number (-1/None if unnumbered)")
    node_ids: tuple[int, ...] = Field(default_factory=tuple, description="Tiled child container IDs")
    floating_node_ids: tuple[int, ...] = Field(default_factory=tuple, description="Floating container IDs")

    @property
    def is_empty(self) -> bool:
        """True if the workspace holds neither tiled nor floating containers."""
        return not self.node_ids and not self.floating_node_ids

    @classmethod
    def from_container(cls, container) -> "WorkspaceDescriptor":
        """Build a snapshot from the workspace Con of a workspace event."""
        return cls(
            name=container.name or "",
            num=getattr(container, "num", None),
            node_ids=tuple(node.id for node in container.nodes),
            floating_node_ids=tuple(node.id for node in container.floating_nodes),
        )


@dataclass(frozen=True)
class TrackedFocused:
    """A window of the tracked class holds focus."""
    window_id: int


@dataclass(frozen=True)
class OtherFocused:
    """Focus is elsewhere, or unknown."""


OTHER = OtherFocused()

FocusState = Union[TrackedFocused, OtherFocused]


class RelocationCommand(BaseModel):
    """Command sending a window back to the scratchpad.

    Example:
        >>> RelocationCommand(window_id=94).to_sway_command()
        '[con_id=94] move scratchpad'
    """

    model_config = ConfigDict(frozen=True)

    window_id: int = Field(..., description="i3/Sway container ID", gt=0)

    def to_sway_command(self) -> str:
        return MOVE_SCRATCHPAD_TEMPLATE.format(window_id=self.window_id)


@dataclass(frozen=True)
class WindowFocusChanged:
    """window::focus event."""
    window: WindowDescriptor


@dataclass(frozen=True)
class WorkspaceFocusChanged:
    """workspace::focus event; current is None when i3 reports no workspace."""
    current: Optional[WorkspaceDescriptor]


FocusEvent = Union[WindowFocusChanged, WorkspaceFocusChanged]
