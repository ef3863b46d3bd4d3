"""
alexa-skill-app: request dispatch for Alexa skills.

Parses inbound skill requests, routes them to registered handlers and
builds the response envelope.
"""

from .application import Application, apps
from .dispatch import Async, Deferred, Dispatch, HandlerRegistry, Sync, classify_result
from .errors import DispatchError, ErrorKind, NoSessionAvailable, RequestFailed, SkillError
from .request import Request
from .response import Response
from .session import Session

__version__ = "0.1.0"
__all__ = [
    "Application",
    "apps",
    "Dispatch",
    "HandlerRegistry",
    "Sync",
    "Deferred",
    "Async",
    "classify_result",
    "Request",
    "Response",
    "Session",
    "SkillError",
    "DispatchError",
    "ErrorKind",
    "NoSessionAvailable",
    "RequestFailed",
]
