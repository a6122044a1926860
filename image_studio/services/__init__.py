"""Services for the application."""

from .provider import GeminiImageProvider
from .session import get_session, close_session, get_provider

__all__ = [
    "GeminiImageProvider",
    "get_session",
    "close_session",
    "get_provider",
]
