"""
Exceptions raised by the Mautic API client.
"""

from typing import List, Optional


class MauticError(Exception):
    """Base class for every error raised by this package."""


class ConfigMissingError(MauticError):
    """No usable configuration was supplied."""


class SerializationError(MauticError):
    """A request payload could not be encoded as JSON."""


class TransportError(MauticError):
    """The HTTP request failed before a response was received."""


class DecodeError(MauticError):
    """A response body did not match the expected shape."""


class InvalidIDError(MauticError, ValueError):
    """An edit was requested without identifying the target entity."""


class ApiError(MauticError):
    """The API answered with an HTTP error status."""

    def __init__(self, status_code: int, text: str = '', messages: Optional[List[str]] = None):
        self.status_code = status_code
        self.text = text
        self.messages = messages or []
        detail = '; '.join(self.messages) if self.messages else text[:200]
        super().__init__(f"Mautic API returned {status_code}: {detail}")
