"""Window class extraction and tracked-class matching."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import WindowDescriptor


def get_window_class(container) -> Optional[str]:
    """Get window class in a Sway/i3-compatible way.

    For Sway/Wayland: Checks app_id first (native Wayland), then window_class (XWayland).
    For i3/X11: Uses window_class property (always from window_properties).

    Args:
        container: i3ipc Container object

    Returns:
        Window class string, or None if the container carries none
    """
    # Sway: native Wayland apps only have app_id
    if getattr(container, "app_id", None):
        return container.app_id

    if getattr(container, "window_class", None):
        return container.window_class

    properties = getattr(container, "window_properties", None)
    if isinstance(properties, dict):
        return properties.get("class")

    return None


def is_tracked_window(window: "WindowDescriptor", tracked_class: str) -> bool:
    """Return True if the window's class is exactly the tracked class.

    Case-sensitive; a window without a class never matches.
    """
    return window.window_class is not None and window.window_class == tracked_class
