"""Per-turn session attribute store."""

import copy
from typing import Any

from .errors import NoSessionAvailable


class Session:
    """
    Session attributes and details for a single turn.

    Built from the ``session`` block of the inbound request, or from ``None``
    when the request carries no session (AudioPlayer events, for example).
    Reads return deep copies, so changes to a returned object only reach the
    session through an explicit ``set``.
    """

    def __init__(self, session: dict[str, Any] | None):
        self._available = session is not None

        if session is None:
            self.attributes: dict[str, Any] = {}
            self.details: dict[str, Any] = {}
            self.session_id: str | None = None
            return

        user = session.get("user") or {}
        self.details = {
            "accessToken": user.get("accessToken"),
            "attributes": session.get("attributes"),
            "application": session.get("application"),
            "new": session.get("new"),
            "sessionId": session.get("sessionId"),
            "userId": user.get("userId"),
        }

        # attributes carried by the request persist into the response
        self.attributes = session.get("attributes") or {}
        self.session_id = session.get("sessionId")

    def _require(self) -> None:
        if not self._available:
            raise NoSessionAvailable()

    def is_available(self) -> bool:
        return self._available

    def is_new(self) -> bool:
        self._require()
        return self.details.get("new") is True

    def get(self, key: str) -> Any:
        self._require()
        return self.get_attributes().get(key)

    def get_attributes(self) -> dict[str, Any]:
        return copy.deepcopy(self.attributes)

    def set(self, key: str, value: Any) -> None:
        self._require()
        self.attributes[key] = value

    def clear(self, key: str | None = None) -> None:
        """Remove ``key`` if it is present, otherwise remove every attribute."""
        self._require()
        if isinstance(key, str) and key in self.attributes:
            del self.attributes[key]
        else:
            self.attributes = {}
