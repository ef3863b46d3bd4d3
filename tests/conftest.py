"""Shared fixtures."""

import asyncio
from typing import Any

import pytest

from alexa_skill_app import Application


def run(app: Application, body: dict[str, Any]) -> dict[str, Any]:
    """Dispatch ``body`` through ``app`` from synchronous test code."""
    return asyncio.run(app.request(body))


def make_request(
    request_type: str = "IntentRequest",
    intent: str | None = None,
    slots: dict[str, Any] | None = None,
    attributes: dict[str, Any] | None = None,
    session: bool = True,
    new: bool = False,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "version": "1.0",
        "request": {"type": request_type, "locale": "en-US"},
        "context": {
            "System": {
                "user": {"userId": "amzn1.ask.account.TEST"},
                "application": {"applicationId": "amzn1.ask.skill.TEST"},
            }
        },
    }
    if intent is not None:
        body["request"]["intent"] = {
            "name": intent,
            "slots": {name: {"name": name, "value": value} for name, value in (slots or {}).items()},
        }
    if session:
        body["session"] = {
            "new": new,
            "sessionId": "amzn1.echo-api.session.TEST",
            "application": {"applicationId": "amzn1.ask.skill.TEST"},
            "attributes": attributes or {},
            "user": {"userId": "amzn1.ask.account.TEST", "accessToken": "token-123"},
        }
    return body


@pytest.fixture
def app() -> Application:
    return Application()


@pytest.fixture
def session_payload() -> dict[str, Any]:
    return make_request(attributes={"count": 1, "profile": {"name": "Ada"}}, new=True)["session"]
