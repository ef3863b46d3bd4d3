"""SSML helpers for building spoken output and plain-text card content."""

import re

_SPEAK_OPEN = re.compile(r"<speak>", re.IGNORECASE)
_SPEAK_CLOSE = re.compile(r"</speak>", re.IGNORECASE)
_MARKUP_TAGS = re.compile(r"</?(speak|break|phoneme|audio|say-as|s\b|w\b)[^>]*>", re.IGNORECASE)


def _strip_speak(text: str | None) -> str:
    text = text or ""
    return _SPEAK_CLOSE.sub(" ", _SPEAK_OPEN.sub(" ", text)).strip()


def from_str(text: str | None, current_ssml: str | None = None) -> str:
    """
    Wrap text in a single <speak> envelope, appending to existing SSML.

    Any <speak> tags already present in either argument are removed first,
    so the result always holds exactly one wrapper pair.
    """
    text = _strip_speak(text)
    current = _strip_speak(current_ssml)

    ssml = "<speak>" + current + (" " if current else "") + text + "</speak>"
    return re.sub(r"  +", " ", ssml)


def cleanse(text: str) -> str:
    """Remove SSML markup so the text can be rendered on a card."""
    text = _MARKUP_TAGS.sub(" ", text)
    text = re.sub(r"\s*\n\s*", "\n", text)
    text = re.sub(r"  +", " ", text)
    text = re.sub(r" ([.,!?;:])", r"\1", text)
    return text.strip()
