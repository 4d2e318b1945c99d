"""i3 Back-to-Scratch Daemon

Event-driven scratchpad helper for i3 and Sway.

This package provides a long-running daemon that:
- Listens to window/workspace focus events over i3 IPC
- Tracks whether a window of the configured class holds focus
- Moves that window back to the scratchpad as soon as it loses focus,
  including when focus moves to an empty workspace

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
