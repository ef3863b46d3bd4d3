"""Alexa request/response models."""

from pydantic import BaseModel, ConfigDict


class AlexaSlot(BaseModel):
    """Alexa slot value."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    value: str | None = None


class AlexaIntent(BaseModel):
    """Alexa intent with slots."""

    model_config = ConfigDict(extra="allow")

    name: str
    slots: dict[str, AlexaSlot] = {}


class SystemUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    userId: str | None = None
    accessToken: str | None = None


class SystemApplication(BaseModel):
    model_config = ConfigDict(extra="allow")

    applicationId: str | None = None


class SystemContext(BaseModel):
    model_config = ConfigDict(extra="allow")

    user: SystemUser = SystemUser()
    application: SystemApplication = SystemApplication()


class AlexaContext(BaseModel):
    """The ``context`` block sent alongside every request."""

    model_config = ConfigDict(extra="allow")

    System: SystemContext = SystemContext()


class AlexaOutputSpeech(BaseModel):
    """Alexa speech output, always SSML."""

    type: str = "SSML"
    ssml: str


class AlexaReprompt(BaseModel):
    outputSpeech: AlexaOutputSpeech
