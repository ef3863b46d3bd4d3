"""AudioPlayer directive models."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class PlayBehavior(str, Enum):
    REPLACE_ALL = "REPLACE_ALL"
    ENQUEUE = "ENQUEUE"
    REPLACE_ENQUEUED = "REPLACE_ENQUEUED"


class ClearBehavior(str, Enum):
    CLEAR_ENQUEUED = "CLEAR_ENQUEUED"
    CLEAR_ALL = "CLEAR_ALL"


class Stream(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str | None = None
    token: str | None = None
    expectedPreviousToken: str | None = None
    offsetInMilliseconds: int | None = None


class AudioItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    stream: Stream | None = None


class PlayDirective(BaseModel):
    type: Literal["AudioPlayer.Play"] = "AudioPlayer.Play"
    playBehavior: PlayBehavior
    audioItem: AudioItem


class StopDirective(BaseModel):
    type: Literal["AudioPlayer.Stop"] = "AudioPlayer.Stop"


class ClearQueueDirective(BaseModel):
    type: Literal["AudioPlayer.ClearQueue"] = "AudioPlayer.ClearQueue"
    clearBehavior: ClearBehavior = ClearBehavior.CLEAR_ALL


def dump_directive(directive: BaseModel) -> dict[str, Any]:
    return directive.model_dump(mode="json", exclude_none=True)
