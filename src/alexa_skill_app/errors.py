"""
Error types raised while dispatching a skill request.

Error kinds form a closed set; the user-facing text for each kind lives in
``config.Messages``.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Kinds of failure the dispatcher knows how to describe."""

    NO_INTENT_FOUND = "NO_INTENT_FOUND"
    NO_LAUNCH_FUNCTION = "NO_LAUNCH_FUNCTION"
    INVALID_REQUEST_TYPE = "INVALID_REQUEST_TYPE"
    NO_SESSION = "NO_SESSION"
    UNHANDLED_EXCEPTION = "UNHANDLED_EXCEPTION"

    @property
    def recoverable(self) -> bool:
        """Whether the dispatcher can answer this kind with a spoken message."""
        return self is not ErrorKind.UNHANDLED_EXCEPTION


class SkillError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class DispatchError(SkillError):
    """Raised by the dispatcher (or a handler) with a known error kind."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(kind.value, message or kind.value, details)
        self.kind = kind


class NoSessionAvailable(DispatchError):
    def __init__(self, message: str = "No session is attached to this request"):
        super().__init__(ErrorKind.NO_SESSION, message)


class RequestFailed(SkillError):
    """
    The outer result of a dispatch was rejected.

    ``reason`` is the message passed to ``Response.fail``; ``exception`` is
    the error that caused the failure, if any.
    """

    def __init__(self, reason: Any, exception: Optional[BaseException] = None):
        super().__init__("request_failed", str(reason))
        self.reason = reason
        self.exception = exception
