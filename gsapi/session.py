"""
Session lifecycle: start, authenticate and log out.
"""

import logging
from typing import Any, Dict, Optional

from gsapi.config import ClientSettings
from gsapi.exceptions import ProtocolError, ValidationError
from gsapi.models import Credentials, SessionSnapshot, SessionState
from gsapi.transport import Transport

logger = logging.getLogger(__name__)


class Session:
    """
    Client credentials plus the server-issued session ID.

    A Session is a plain mutable holder with no locking. Lifecycle calls on
    the same instance must be serialized by the caller; concurrent callers
    that need independent state should each own a Session. Requests never
    read the Session directly: each call works from an immutable
    :class:`SessionSnapshot` taken when it is sent.
    """

    def __init__(
        self,
        client_key: str,
        client_secret: str,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize with client credentials.

        Args:
            client_key: Public client key (sent as ``wsKey``)
            client_secret: Shared secret used only to sign requests
            transport: Transport to send lifecycle calls with
        """
        self.credentials = Credentials(client_key=client_key, client_secret=client_secret)
        self.transport = transport or Transport()
        self.session_id: Optional[str] = None
        self.user_id: Optional[Any] = None

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, transport: Optional[Transport] = None
    ) -> "Session":
        """Create a session from client settings."""
        return cls(
            client_key=settings.client_key,
            client_secret=settings.client_secret,
            transport=transport or Transport.from_settings(settings),
        )

    @property
    def client_key(self) -> str:
        return self.credentials.client_key

    @property
    def client_secret(self) -> str:
        return self.credentials.client_secret

    @property
    def state(self) -> SessionState:
        """
        Derived lifecycle state.

        AUTHENTICATED only reflects that the last authentication response
        carried a user ID; the server remains the authority.
        """
        if self.session_id is None:
            return SessionState.ANONYMOUS
        if self.user_id is None:
            return SessionState.SESSION_ACTIVE
        return SessionState.AUTHENTICATED

    def snapshot(self) -> SessionSnapshot:
        """Return an immutable copy of the credentials and session ID."""
        return SessionSnapshot(credentials=self.credentials, session_id=self.session_id)

    def set_credentials(self, client_key: str, client_secret: str) -> None:
        """Replace the client credentials."""
        self.credentials = Credentials(client_key=client_key, client_secret=client_secret)

    def set_session_id(self, session_id: Optional[str]) -> None:
        """Adopt an existing session ID (or clear it with None)."""
        self.session_id = session_id
        self.user_id = None

    def start_session(self) -> str:
        """
        Start a new session on the server.

        Returns:
            The new session ID

        Raises:
            ProtocolError: If the response carries no session ID
        """
        response = self.transport.send("startSession", {}, self.snapshot())
        session_id = _result(response).get("sessionID")
        if not session_id:
            raise ProtocolError("Bad response from API: no sessionID returned")

        self.session_id = session_id
        self.user_id = None
        logger.info("Session started")
        return session_id

    def authenticate_credentials(self, username: str, password: str) -> Dict[str, Any]:
        """
        Authenticate a user by username (or email) and password.

        Args:
            username: Username or email
            password: Password

        Returns:
            Result map describing the user

        Raises:
            ValidationError: If username or password is empty
            ProtocolError: If the response carries no UserID
        """
        if not username or not password:
            raise ValidationError("You must provide a valid username and password")

        response = self.transport.send(
            "authenticateEx", {"login": username, "password": password}, self.snapshot()
        )
        return self._record_user(response, "Check the credentials.")

    def authenticate_token(self, token: str) -> Dict[str, Any]:
        """
        Authenticate a user with an access token.

        Raises:
            ValidationError: If the token is empty
            ProtocolError: If the response carries no UserID
        """
        if not token:
            raise ValidationError("You must provide a valid token")

        response = self.transport.send("authenticateToken", {"token": token}, self.snapshot())
        return self._record_user(response, "Check the validity of the token.")

    def logout(self) -> Any:
        """
        Log out any authenticated user from the current session.

        The session ID is kept: the server ends the user login, not the
        session. Use :meth:`end_session` to forget the session ID locally.

        Raises:
            ValidationError: If no session has been started
        """
        if self.session_id is None:
            raise ValidationError("Trying to log out without an active session")

        response = self.transport.send("logout", {}, self.snapshot())
        self.user_id = None
        logger.info("Logged out")
        return response.get("result")

    def end_session(self) -> None:
        """Forget the session ID locally; no request is made."""
        self.session_id = None
        self.user_id = None

    def _record_user(self, response: Dict[str, Any], hint: str) -> Dict[str, Any]:
        result = _result(response)
        user_id = result.get("UserID")
        if not user_id:
            raise ProtocolError(f"Bad response from API: no UserID returned. {hint}")
        self.user_id = user_id
        logger.info(f"Authenticated user {user_id}")
        return result


def _result(response: Dict[str, Any]) -> Dict[str, Any]:
    result = response.get("result")
    return result if isinstance(result, dict) else {}
