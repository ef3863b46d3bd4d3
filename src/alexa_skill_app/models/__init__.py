"""Pydantic models for the Alexa request/response schema."""

from .alexa import AlexaContext, AlexaIntent, AlexaOutputSpeech, AlexaReprompt, AlexaSlot
from .cards import CardImage, LinkAccountCard, SimpleCard, StandardCard, build_card
from .directives import (
    AudioItem,
    ClearBehavior,
    ClearQueueDirective,
    PlayBehavior,
    PlayDirective,
    StopDirective,
    Stream,
)

__all__ = [
    "AlexaContext",
    "AlexaIntent",
    "AlexaOutputSpeech",
    "AlexaReprompt",
    "AlexaSlot",
    "CardImage",
    "SimpleCard",
    "StandardCard",
    "LinkAccountCard",
    "build_card",
    "AudioItem",
    "Stream",
    "PlayBehavior",
    "ClearBehavior",
    "PlayDirective",
    "StopDirective",
    "ClearQueueDirective",
]
