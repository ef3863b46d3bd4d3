"""
Request dispatch and the single-completion protocol.

A ``Dispatch`` owns one turn: it builds the session, request and response,
runs the hooks, invokes the matching handler and settles one outer future.
Handlers are called as ``handler(request, response, done)`` and may finish
in one of three ways:

- return an awaitable: its outcome completes the turn
- return ``False`` (deprecated): the turn completes when the handler later
  calls ``done`` or ``response.send`` / ``response.fail``
- return anything else: the turn completes immediately

Whatever fires first wins. ``done`` warns on a second call, and
``send`` / ``fail`` run the post hook once and settle the future once.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from .config import Messages
from .errors import DispatchError, ErrorKind, RequestFailed
from .request import AUDIO_PLAYER_PREFIX, Request
from .response import Response

logger = logging.getLogger(__name__)

Handler = Callable[[Request, Response, Callable[..., None]], Any]
PreHook = Callable[[Request, Response, Optional[str]], Any]
PostHook = Callable[[Request, Response, Optional[str], Optional[BaseException]], Any]
ErrorHook = Callable[[Any, Request, Response], Any]


class HandlerRegistry:
    """
    Handlers keyed by intent name and lifecycle event.

    Registration happens during setup. The registry is frozen when the first
    request is served, after which it is only read.
    """

    def __init__(self) -> None:
        self.intents: dict[str, Handler] = {}
        self.audio_player_events: dict[str, Handler] = {}
        self.launch: Handler | None = None
        self.session_ended: Handler | None = None
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError("Handlers cannot be registered after the application started serving requests")

    def add_intent(self, name: str, func: Handler) -> None:
        self._check_open()
        self.intents[name] = func

    def add_audio_player_event(self, event: str, func: Handler) -> None:
        self._check_open()
        self.audio_player_events[event] = func

    def set_launch(self, func: Handler) -> None:
        self._check_open()
        self.launch = func

    def set_session_ended(self, func: Handler) -> None:
        self._check_open()
        self.session_ended = func


@dataclass(frozen=True)
class Sync:
    """The handler finished when it returned."""

    value: Any = None


@dataclass(frozen=True)
class Deferred:
    """The handler returned ``False`` and will complete the turn itself."""


@dataclass(frozen=True)
class Async:
    """The handler returned an awaitable whose outcome completes the turn."""

    awaitable: Awaitable[Any]


HandlerResult = Union[Sync, Deferred, Async]


def classify_result(value: Any) -> HandlerResult:
    if inspect.isawaitable(value):
        return Async(value)
    if value is False:
        return Deferred()
    return Sync(value)


class CompletionState(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class StateCell:
    """Holds the terminal state of a dispatch; moves out of PENDING once."""

    def __init__(self) -> None:
        self._state = CompletionState.PENDING

    @property
    def state(self) -> CompletionState:
        return self._state

    def compare_and_set(self, expected: CompletionState, new: CompletionState) -> bool:
        if self._state is not expected:
            return False
        self._state = new
        return True


class Phase(str, Enum):
    PENDING = "pending"
    RUNNING_PRE = "running_pre"
    DISPATCHING = "dispatching"
    AWAITING_HANDLER = "awaiting_handler"
    FINALIZING = "finalizing"
    ERROR = "error"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class Dispatch:
    """One turn of request handling."""

    def __init__(
        self,
        registry: HandlerRegistry,
        body: dict[str, Any],
        messages: Messages,
        pre: PreHook | None = None,
        post: PostHook | None = None,
        error: ErrorHook | None = None,
    ):
        self.registry = registry
        self.body = body
        self.messages = messages
        self.pre = pre
        self.post = post
        self.error = error

        self.request = Request(body)
        self.response = Response(self.request.get_session())
        self.response.bind(self)
        self.request_type = self.request.type()

        self.phase = Phase.PENDING
        self._state = StateCell()
        self._future: asyncio.Future[dict[str, Any]] | None = None
        self._done_called = False
        self._post_executed = False
        self._background: set[asyncio.Future[Any]] = set()

    @property
    def state(self) -> CompletionState:
        return self._state.state

    @property
    def resolved(self) -> bool:
        return self._state.state is not CompletionState.PENDING

    async def run(self) -> dict[str, Any]:
        """
        Handle the request and return the response document.

        Raises:
            RequestFailed: if the turn was failed
        """
        self._future = asyncio.get_running_loop().create_future()

        try:
            self.phase = Phase.RUNNING_PRE
            if self.pre is not None:
                self._call_hook(self.pre, self.request, self.response, self.request_type)

            if not self.resolved:
                self.phase = Phase.DISPATCHING
                await self._dispatch()
        except Exception as e:
            self._recover(e)

        return await self._future

    async def _dispatch(self) -> None:
        request_type = self.request_type

        if request_type == "IntentRequest":
            intent_name = self._intent_name()
            func = self.registry.intents.get(intent_name) if intent_name else None
            if func is None:
                raise DispatchError(ErrorKind.NO_INTENT_FOUND, f"No handler registered for intent {intent_name}")
            await self._invoke(func, "intent")

        elif request_type == "LaunchRequest":
            if self.registry.launch is None:
                raise DispatchError(ErrorKind.NO_LAUNCH_FUNCTION, "No launch handler registered")
            await self._invoke(self.registry.launch, "launch")

        elif request_type == "SessionEndedRequest":
            if self.registry.session_ended is None:
                self.response.send()
            else:
                await self._invoke(self.registry.session_ended, "session ended")

        elif request_type and request_type.startswith(AUDIO_PLAYER_PREFIX):
            event = request_type[len(AUDIO_PLAYER_PREFIX):]
            func = self.registry.audio_player_events.get(event)
            if func is None:
                logger.debug(f"No handler for AudioPlayer event {event}")
                self.response.send()
            else:
                await self._invoke(func, "audio player")

        else:
            raise DispatchError(ErrorKind.INVALID_REQUEST_TYPE, f"Invalid request type: {request_type}")

    def _intent_name(self) -> str | None:
        try:
            return self.body["request"]["intent"]["name"]
        except (KeyError, TypeError):
            return None

    async def _invoke(self, func: Handler, label: str) -> None:
        self.phase = Phase.AWAITING_HANDLER
        outcome = classify_result(func(self.request, self.response, self.done))

        if isinstance(outcome, Async):
            try:
                await outcome.awaitable
            except Exception as e:
                self.done(e)
            else:
                self.done()
        elif isinstance(outcome, Deferred):
            logger.warning(
                f"NOTE: returning False from {label} handlers to complete asynchronously is deprecated; "
                "return an awaitable instead"
            )
        else:
            self.done()

    def done(self, error: Any = None) -> None:
        """Completion callback handed to handlers; only the first call counts."""
        if self._done_called:
            logger.warning("Response has already been sent")
            return
        self._done_called = True

        try:
            if error:
                self._handle_error(error)
            else:
                self.response.send()
        except Exception as e:
            logger.exception("Error handling failed")
            self._finalize_rejected(e)

    def send(self, exception: BaseException | None = None) -> None:
        if not self._finalize_safely(exception):
            return
        if self._state.compare_and_set(CompletionState.PENDING, CompletionState.RESOLVED):
            self.phase = Phase.RESOLVED
            self._settle(result=self.response.response)

    def fail(self, message: Any, exception: BaseException | None = None) -> None:
        if not self._finalize_safely(exception):
            return
        if self._state.compare_and_set(CompletionState.PENDING, CompletionState.REJECTED):
            self.phase = Phase.REJECTED
            self._settle(error=RequestFailed(message, exception))

    def _finalize_safely(self, exception: BaseException | None) -> bool:
        """Run finalization; a failing post hook rejects the turn instead of raising."""
        try:
            self._finalize(exception)
        except Exception as e:
            logger.exception("Post hook failed")
            self._finalize_rejected(e)
            return False
        return True

    def _finalize(self, exception: BaseException | None) -> None:
        if not self.resolved:
            self.phase = Phase.FINALIZING
        self.response.prepare()

        # post runs once, even when send/fail are called again
        if self.post is not None and not self._post_executed:
            self._post_executed = True
            self._call_hook(self.post, self.request, self.response, self.request_type, exception)

    def _settle(self, result: dict[str, Any] | None = None, error: RequestFailed | None = None) -> None:
        if self._future is None or self._future.done():
            logger.warning(f"Dispatch settled without a pending caller ({self.state.value})")
            return
        if error is not None:
            self._future.set_exception(error)
        else:
            self._future.set_result(result)

    def _handle_error(self, e: Any) -> None:
        if not self.resolved:
            self.phase = Phase.ERROR

        if self.error is not None:
            self._call_hook(self.error, e, self.request, self.response)
        elif isinstance(e, DispatchError) and e.kind.recoverable:
            message = self.messages.for_kind(e.kind)
            if not self.request.is_audio_player():
                self.response.say(message)
                self.response.send(e)
            else:
                # AudioPlayer requests cannot carry speech
                self.response.fail(message, e)

        if not self.resolved:
            exc = e if isinstance(e, BaseException) else None
            logger.error(f"Unhandled exception in {self.request_type} handler: {e!r}", exc_info=exc)
            detail = str(e) if e is not None else ""
            reason = self.messages.for_kind(ErrorKind.UNHANDLED_EXCEPTION)
            self.response.fail(f"{reason}: {detail}." if detail else f"{reason}.", exc)

    def _recover(self, e: Exception) -> None:
        try:
            self._handle_error(e)
        except Exception as inner:
            logger.exception("Error handling failed")
            self._finalize_rejected(inner)

    def _finalize_rejected(self, e: Exception) -> None:
        try:
            self._finalize(e)
        except Exception:
            logger.exception("Post hook failed while rejecting request")

        if self._state.compare_and_set(CompletionState.PENDING, CompletionState.REJECTED):
            self.phase = Phase.REJECTED
            reason = self.messages.for_kind(ErrorKind.UNHANDLED_EXCEPTION)
            self._settle(error=RequestFailed(f"{reason}: {e}.", e))

    def _call_hook(self, hook: Callable[..., Any], *args: Any) -> None:
        result = hook(*args)
        if inspect.isawaitable(result):
            # hooks are not awaited; keep a reference until the task finishes
            task = asyncio.ensure_future(result)
            self._background.add(task)
            task.add_done_callback(self._hook_finished)

    def _hook_finished(self, task: asyncio.Future[Any]) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Asynchronous hook failed", exc_info=task.exception())
