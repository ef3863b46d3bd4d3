"""Alexa Skill webhook endpoint."""

import inspect
import logging
from typing import Any, Callable

from fastapi import APIRouter, HTTPException, Request

from ..application import Application
from ..errors import RequestFailed

logger = logging.getLogger(__name__)

PreRequestHook = Callable[[dict[str, Any], Request], Any]
PostRequestHook = Callable[[dict[str, Any], Request], Any]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _request_type(body: Any) -> Any:
    request = body.get("request") if isinstance(body, dict) else None
    return request.get("type") if isinstance(request, dict) else None


def build_router(
    app: Application,
    endpoint: str | None = None,
    pre_request: PreRequestHook | None = None,
    post_request: PostRequestHook | None = None,
) -> APIRouter:
    """
    Expose ``app`` as ``POST /<endpoint>``.

    The endpoint defaults to the application name, then to the configured
    ``endpoint`` setting. ``pre_request(body, http_request)`` may return a
    replacement request body and ``post_request(response_json, http_request)``
    a replacement response document; either may be async. Requests are not
    signature-checked here.
    """
    path = "/" + (endpoint or app.name or app.settings.endpoint).strip("/")
    router = APIRouter(tags=["alexa"])

    @router.post(path)
    async def alexa_webhook(request: Request) -> dict[str, Any]:
        """Handle Alexa Skill requests for the bound application."""
        body = await request.json()

        logger.info(f"Alexa request received: {_request_type(body)}")

        try:
            if pre_request is not None:
                body = await _resolve(pre_request(body, request)) or body

            response_json = await app.request(body)

            if post_request is not None:
                response_json = await _resolve(post_request(response_json, request)) or response_json
        except RequestFailed as e:
            logger.error(f"Alexa request failed: {e.reason}")
            raise HTTPException(status_code=500, detail="Server Error")
        except Exception:
            logger.exception("Error handling Alexa request")
            raise HTTPException(status_code=500, detail="Server Error")

        return response_json

    return router
