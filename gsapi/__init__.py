"""
Client library for the Grooveshark public web API.
"""

from gsapi.api import GroovesharkAPI
from gsapi.config import ClientSettings, GSAPIConfig, load_config
from gsapi.exceptions import (
    ApiError,
    ConfigError,
    GSAPIError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from gsapi.models import NOT_SET, Credentials, SessionSnapshot, SessionState
from gsapi.session import Session
from gsapi.transport import Transport

__all__ = [
    "GroovesharkAPI",
    "Session",
    "Transport",
    "Credentials",
    "SessionSnapshot",
    "SessionState",
    "NOT_SET",
    "ClientSettings",
    "GSAPIConfig",
    "load_config",
    "GSAPIError",
    "ValidationError",
    "TransportError",
    "ApiError",
    "ProtocolError",
    "ConfigError",
]
