"""HTTP route modules."""

from . import alexa, health

__all__ = ["alexa", "health"]
