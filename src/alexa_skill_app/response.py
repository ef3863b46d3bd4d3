"""Builder for the outbound response envelope."""

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from . import ssml
from .models.alexa import AlexaOutputSpeech, AlexaReprompt
from .models.cards import LinkAccountCard, build_card
from .models.directives import (
    AudioItem,
    ClearBehavior,
    ClearQueueDirective,
    PlayBehavior,
    PlayDirective,
    StopDirective,
    dump_directive,
)
from .session import Session

logger = logging.getLogger(__name__)

_UNSET = object()


class Completion(Protocol):
    """Terminal operations bound to a response by the dispatch that owns it."""

    @property
    def resolved(self) -> bool: ...

    def send(self, exception: BaseException | None = None) -> None: ...

    def fail(self, message: Any, exception: BaseException | None = None) -> None: ...


class Response:
    """
    Mutable response document for one turn.

    Builder methods return the response so calls can be chained::

        response.say("Hello").card({"type": "Simple", "title": "Hi", "content": "Hello"})
    """

    def __init__(self, session: Session):
        self.session_object = session
        self.response: dict[str, Any] = {
            "version": "1.0",
            "response": {
                "directives": [],
                "shouldEndSession": True,
            },
        }
        self._completion: Completion | None = None

    def bind(self, completion: Completion) -> None:
        self._completion = completion

    @property
    def resolved(self) -> bool:
        return self._completion is not None and self._completion.resolved

    def send(self, exception: BaseException | None = None) -> None:
        """
        Complete the turn successfully.

        Only needed by handlers that finish asynchronously without returning
        an awaitable.
        """
        if self._completion is None:
            raise RuntimeError("Response is not attached to a dispatch")
        self._completion.send(exception)

    def fail(self, message: Any, exception: BaseException | None = None) -> None:
        """Reject the turn; ``message`` is reported to the caller instead of a response."""
        if self._completion is None:
            raise RuntimeError("Response is not attached to a dispatch")
        self._completion.fail(message, exception)

    @property
    def _body(self) -> dict[str, Any]:
        return self.response["response"]

    def say(self, text: str) -> "Response":
        """Speak ``text``; repeated calls append to the same SSML envelope."""
        current = self._body.get("outputSpeech")
        current_ssml = current["ssml"] if current else None
        self._body["outputSpeech"] = AlexaOutputSpeech(ssml=ssml.from_str(text, current_ssml)).model_dump()
        return self

    def reprompt(self, text: str) -> "Response":
        current = self._body.get("reprompt")
        current_ssml = current["outputSpeech"]["ssml"] if current else None
        self._body["reprompt"] = AlexaReprompt(
            outputSpeech=AlexaOutputSpeech(ssml=ssml.from_str(text, current_ssml))
        ).model_dump()
        return self

    def clear(self) -> "Response":
        """Reset the output speech to an empty SSML envelope."""
        self._body["outputSpeech"] = AlexaOutputSpeech(ssml=ssml.from_str("")).model_dump()
        return self

    def card(self, card: dict[str, Any] | str, content: str | None = None) -> "Response":
        """
        Attach a card to the response.

        ``card(title, content)`` is accepted as shorthand for a Simple card.
        An invalid card is logged and leaves the response unchanged.
        """
        if isinstance(card, str):
            card = {"type": "Simple", "title": card, "content": content}

        try:
            self._body["card"] = build_card(card)
        except ValidationError as e:
            logger.error(f"Invalid {card.get('type')} card, not attached: {e}")
        return self

    def link_account(self) -> "Response":
        self._body["card"] = LinkAccountCard().model_dump()
        return self

    def should_end_session(self, end: bool, reprompt: str | None = None) -> "Response":
        self._body["shouldEndSession"] = end
        if reprompt:
            self.reprompt(reprompt)
        return self

    def audio_player_play(self, play_behavior: PlayBehavior | str, audio_item: dict[str, Any]) -> "Response":
        directive = PlayDirective(
            playBehavior=PlayBehavior(play_behavior),
            audioItem=AudioItem.model_validate(audio_item),
        )
        self._body["directives"].append(dump_directive(directive))
        return self

    def audio_player_play_stream(self, play_behavior: PlayBehavior | str, stream: dict[str, Any]) -> "Response":
        return self.audio_player_play(play_behavior, {"stream": stream})

    def audio_player_stop(self) -> "Response":
        self._body["directives"].append(dump_directive(StopDirective()))
        return self

    def audio_player_clear_queue(self, clear_behavior: ClearBehavior | str | None = None) -> "Response":
        directive = ClearQueueDirective(clearBehavior=ClearBehavior(clear_behavior or ClearBehavior.CLEAR_ALL))
        self._body["directives"].append(dump_directive(directive))
        return self

    def set_session_attributes(self, attributes: dict[str, Any]) -> None:
        self.response["sessionAttributes"] = attributes

    def prepare(self) -> None:
        """Copy the session attributes into the document before it is sent."""
        self.set_session_attributes(self.session_object.get_attributes())

    # Legacy helpers

    def session(self, name: str, value: Any = _UNSET) -> Any:
        """Read a session attribute, or set it when ``value`` is given."""
        if value is _UNSET:
            return self.session_object.get(name)
        self.session_object.set(name, value)
        return self

    def clear_session(self, name: str | None = None) -> "Response":
        """Remove ``name`` from the session, or every attribute when omitted."""
        self.session_object.clear(name)
        return self
