"""
Card models.

Cards render as plain text in the companion app, so every text field that
reaches a card goes through ``ssml.cleanse`` during validation.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .. import ssml

logger = logging.getLogger(__name__)


class CardImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    smallImageUrl: str | None = None
    largeImageUrl: str | None = None

    @model_validator(mode="after")
    def _require_a_size(self) -> "CardImage":
        if self.smallImageUrl is None and self.largeImageUrl is None:
            raise ValueError("If card.image is defined, must specify at least smallImageUrl or largeImageUrl")
        return self


class SimpleCard(BaseModel):
    """Title and plain text content."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Simple"] = "Simple"
    title: str | None = None
    content: str

    @field_validator("content")
    @classmethod
    def _cleanse(cls, value: str) -> str:
        return ssml.cleanse(value)


class StandardCard(BaseModel):
    """Title, text and an optional image."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Standard"] = "Standard"
    title: str | None = None
    text: str
    image: CardImage | None = None

    @field_validator("text")
    @classmethod
    def _cleanse(cls, value: str) -> str:
        return ssml.cleanse(value)


class LinkAccountCard(BaseModel):
    """Asks the user to link their account to the skill."""

    type: Literal["LinkAccount"] = "LinkAccount"


CARD_TYPES: dict[str, type[BaseModel]] = {
    "Simple": SimpleCard,
    "Standard": StandardCard,
    "LinkAccount": LinkAccountCard,
}


def build_card(descriptor: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a card descriptor and return the card as sent on the wire.

    Raises:
        pydantic.ValidationError: if a required field for the card type is missing
    """
    model = CARD_TYPES.get(descriptor.get("type"))
    if model is None:
        logger.debug(f"Passing through card of unknown type: {descriptor.get('type')}")
        return dict(descriptor)

    return model.model_validate(descriptor).model_dump(exclude_none=True)
