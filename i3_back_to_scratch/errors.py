"""
Error types for the back-to-scratch daemon.

Every error raised across a collaborator boundary (i3 connection, event
stream, command channel) derives from BackToScratchError and carries a
structured code so the daemon can pick an exit status and log context.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the back-to-scratch daemon.

    - 1400-1499: i3/Sway IPC errors
    - 1500-1599: Internal consistency errors
    """

    # i3/Sway IPC errors (1400-1499)
    I3_CONNECT_FAILED = 1400
    I3_EVENT_STREAM_FAILED = 1401
    I3_COMMAND_FAILED = 1402

    # Internal consistency errors (1500-1599)
    UNEXPECTED_EVENT = 1500


class BackToScratchError(Exception):
    """Base exception for back-to-scratch daemon errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize daemon error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for structured logging.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class I3ConnectError(BackToScratchError):
    """Failure to establish an i3 IPC connection."""

    def __init__(self, purpose: str, reason: str):
        """
        Initialize connection error.

        Args:
            purpose: Which connection failed ("events" or "commands")
            reason: Reason for failure
        """
        super().__init__(
            code=ErrorCode.I3_CONNECT_FAILED,
            message=f"Failed to connect to i3 ({purpose} connection): {reason}",
            suggestion="Ensure i3/Sway is running and I3SOCK/SWAYSOCK points at its IPC socket",
            context={"purpose": purpose, "reason": reason}
        )


class EventStreamError(BackToScratchError):
    """The i3 event subscription ended or failed."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.I3_EVENT_STREAM_FAILED,
            message=f"i3 event stream failed: {reason}",
            suggestion="Restart the daemon once i3 is reachable again",
            context={"reason": reason}
        )


class CommandError(BackToScratchError):
    """An i3 command could not be delivered or got no reply."""

    def __init__(self, command: str, reason: str):
        """
        Initialize command error.

        Args:
            command: The command string that was sent
            reason: The transport failure
        """
        super().__init__(
            code=ErrorCode.I3_COMMAND_FAILED,
            message=f"i3 command '{command}' failed: {reason}",
            context={"command": command, "reason": reason}
        )


class UnexpectedEventError(BackToScratchError):
    """An event outside the subscribed set reached the focus tracker."""

    def __init__(self, event: Any):
        event_type = type(event).__name__
        super().__init__(
            code=ErrorCode.UNEXPECTED_EVENT,
            message=f"Received unexpected event type {event_type}; subscribed only to window and workspace focus",
            context={"event_type": event_type}
        )
