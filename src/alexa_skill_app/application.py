"""Skill application: handler registration and request entrypoints."""

import asyncio
import logging
from typing import Any, Callable

from .config import Messages, Settings
from .config import settings as default_settings
from .dispatch import Dispatch, ErrorHook, Handler, HandlerRegistry, PostHook, PreHook

logger = logging.getLogger(__name__)

# Named applications, by name
apps: dict[str, "Application"] = {}


class Application:
    """
    A skill: a set of handlers plus optional hooks.

    Handlers are registered with decorators::

        app = Application("hello")

        @app.intent("HelloIntent")
        def hello(request, response, done):
            response.say(f"Hello {request.slot('name', 'there')}")

    ``pre`` runs before any handler, ``post`` runs last on every request
    (after errors and after an early send/fail too) and ``error`` replaces
    the default handling of errors raised by handlers. None of them are
    awaited.
    """

    def __init__(self, name: str | None = None, settings: Settings | None = None):
        self.name = name
        self.settings = settings or default_settings
        self.messages: Messages = self.settings.messages.model_copy()

        self.pre: PreHook | None = None
        self.post: PostHook | None = None
        self.error: ErrorHook | None = None

        self.registry = HandlerRegistry()

        if name:
            apps[name] = self

    def intent(self, name: str, func: Handler | None = None) -> Any:
        """Register the handler for intent ``name``; usable as a decorator."""
        if func is not None:
            self.registry.add_intent(name, func)
            return func

        def decorator(f: Handler) -> Handler:
            self.registry.add_intent(name, f)
            return f

        return decorator

    def audio_player(self, event: str, func: Handler | None = None) -> Any:
        """Register the handler for ``AudioPlayer.<event>`` requests."""
        if func is not None:
            self.registry.add_audio_player_event(event, func)
            return func

        def decorator(f: Handler) -> Handler:
            self.registry.add_audio_player_event(event, f)
            return f

        return decorator

    def launch(self, func: Handler) -> Handler:
        self.registry.set_launch(func)
        return func

    def session_ended(self, func: Handler) -> Handler:
        self.registry.set_session_ended(func)
        return func

    async def request(self, body: dict[str, Any]) -> dict[str, Any]:
        """
        Handle a decoded request envelope.

        Args:
            body: Full Alexa request envelope

        Returns:
            Alexa response envelope

        Raises:
            RequestFailed: if the request was failed by the application
        """
        self.registry.freeze()

        dispatch = Dispatch(
            self.registry,
            body,
            self.messages,
            pre=self.pre,
            post=self.post,
            error=self.error,
        )

        logger.info(f"Alexa request type: {dispatch.request_type}")

        return await dispatch.run()

    def handler(self, event: dict[str, Any], context: Any = None) -> dict[str, Any]:
        """AWS Lambda entrypoint; a failed request raises ``RequestFailed``."""
        return asyncio.run(self.request(event))

    def lambda_handler(self) -> Callable[[dict[str, Any], Any], dict[str, Any]]:
        return self.handler
