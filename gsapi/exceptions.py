"""
Custom exceptions for gsapi.
"""

from typing import Optional


class GSAPIError(Exception):
    """Base exception for all gsapi errors."""


class ValidationError(GSAPIError):
    """Caller-supplied arguments failed a precondition (raised before any request)."""


class TransportError(GSAPIError):
    """HTTP failure: unexpected status code, timeout or connection error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiError(GSAPIError):
    """The remote service answered with an ``errors`` payload."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code {self.code})"


class ProtocolError(GSAPIError):
    """A 200 response that is missing a required field or is not JSON."""


class ConfigError(GSAPIError):
    """Configuration errors."""
