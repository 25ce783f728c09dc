"""
Data models for gsapi.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class _NotSet:
    """Marker for an optional argument the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET: Any = _NotSet()


class SessionState(str, Enum):
    """Where a session stands, as far as the client can tell."""

    ANONYMOUS = "anonymous"
    SESSION_ACTIVE = "session_active"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Credentials:
    """Client key/secret pair issued by the service."""

    client_key: str
    client_secret: str = field(repr=False)  # never logged


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of a session, carried by a single request."""

    credentials: Credentials
    session_id: Optional[str] = None

    @property
    def client_key(self) -> str:
        return self.credentials.client_key

    @property
    def client_secret(self) -> str:
        return self.credentials.client_secret


def build_parameters(required: Optional[Dict[str, Any]] = None, **optional: Any) -> Dict[str, Any]:
    """
    Build a request parameter map.

    Required parameters are always included. Optional parameters are only
    included when supplied: values that are NOT_SET or None are left out of
    the map entirely rather than sent as null.

    Args:
        required: Parameters that are always sent
        **optional: Parameters sent only when given a value

    Returns:
        Parameter dictionary
    """
    parameters = dict(required or {})
    for key, value in optional.items():
        if value is NOT_SET or value is None:
            continue
        parameters[key] = value
    return parameters
