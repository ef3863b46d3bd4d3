"""Library configuration via environment variables."""

import logging

from pydantic import BaseModel
from pydantic_settings import BaseSettings

from .errors import ErrorKind


class Messages(BaseModel):
    """User-facing text spoken (or reported) for each error kind."""

    # an intent came in that the application has no handler for
    no_intent_found: str = "Sorry, the application didn't know what to do with that intent"
    # the skill was opened with no launch handler defined
    no_launch_function: str = "Try telling the application what to do instead of opening it"
    invalid_request_type: str = "Error: not a valid request"
    # the request carries no session object
    no_session: str = "This request doesn't support session attributes"
    unhandled_exception: str = "Unhandled exception"

    def for_kind(self, kind: ErrorKind) -> str:
        return getattr(self, kind.value.lower())


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "alexa-skill-app"

    # HTTP binding
    endpoint: str = "alexa"
    cors_origins: list[str] = ["*"]

    messages: Messages = Messages()

    class Config:
        env_prefix = "ALEXA_APP_"
        env_nested_delimiter = "__"
        env_file = ".env"
        case_sensitive = False


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the HTTP app and the CLI."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


settings = Settings()
