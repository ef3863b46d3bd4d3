"""Typed view over an inbound request envelope."""

import copy
import logging
from typing import Any

from pydantic import ValidationError

from .models.alexa import AlexaContext, AlexaIntent
from .session import Session

logger = logging.getLogger(__name__)

AUDIO_PLAYER_PREFIX = "AudioPlayer."


class Request:
    """
    Wraps the decoded request body and the session built from it.

    ``is_session_new``, ``session_attributes``, ``session_details`` and
    ``session_id`` are snapshots taken at construction; read the live values
    through ``get_session()``.
    """

    def __init__(self, data: dict[str, Any] | None):
        self.data = data
        body = data if isinstance(data, dict) else {}

        self._session = Session(body.get("session"))

        self.context: AlexaContext | None = None
        self.user_id: str | None = None
        self.application_id: str | None = None
        if body.get("context"):
            try:
                self.context = AlexaContext.model_validate(body["context"])
            except ValidationError as e:
                logger.warning(f"Ignoring malformed request context: {e}")
            else:
                self.user_id = self.context.System.user.userId
                self.application_id = self.context.System.application.applicationId

        session = self._session
        self.is_session_new = session.is_new() if session.is_available() else False
        self.session_attributes = session.get_attributes()
        self.session_details = copy.deepcopy(session.details)
        self.session_id = session.session_id

    def get_session(self) -> Session:
        return self._session

    def has_session(self) -> bool:
        return self._session.is_available()

    def type(self) -> str | None:
        """Return the request type, or None if the body has none."""
        try:
            request_type = self.data["request"]["type"]
        except (KeyError, TypeError):
            request_type = None

        if not request_type or not isinstance(request_type, str):
            logger.error(f"Missing request type: {self.data}")
            return None

        return request_type

    def is_audio_player(self) -> bool:
        request_type = self.type()
        return bool(request_type) and request_type.startswith(AUDIO_PLAYER_PREFIX)

    def intent(self) -> AlexaIntent | None:
        try:
            return AlexaIntent.model_validate(self.data["request"]["intent"])
        except (KeyError, TypeError, ValidationError):
            return None

    def intent_name(self) -> str | None:
        intent = self.intent()
        return intent.name if intent else None

    def slot(self, name: str, default: Any = None) -> Any:
        """Return the value of slot ``name``, or ``default`` if it is missing."""
        try:
            return self.data["request"]["intent"]["slots"][name]["value"]
        except (KeyError, TypeError) as e:
            logger.debug(f"Missing slot in request: {name} ({e!r})")
            return default

    # Legacy helpers

    def session(self, key: str) -> Any:
        return self._session.get(key)
