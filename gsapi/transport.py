"""
Signed request transport for the web API.

Every remote call is a JSON envelope POSTed to a single endpoint. The body
is signed with HMAC-MD5 keyed by the client secret and the hex digest is
passed as the ``sig`` query parameter; the service recomputes the signature
over the bytes it receives, so the signed bytes and the sent bytes must be
the same object.
"""

import hashlib
import hmac
import json
import logging
import time
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

import requests

from gsapi.config import DEFAULT_API_URL, ClientSettings
from gsapi.exceptions import ApiError, ProtocolError, TransportError, ValidationError
from gsapi.models import SessionSnapshot

if TYPE_CHECKING:
    from gsapi.session import Session

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 2.0
DEFAULT_READ_TIMEOUT = 6.0
DEFAULT_TOTAL_TIMEOUT = 6.0
# Reads return as soon as a byte arrives, so the deadline is checked per byte
BODY_CHUNK_SIZE = 1


def sign(body: bytes, secret: str) -> str:
    """Return the lowercase hex HMAC-MD5 of ``body`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.md5).hexdigest()


def build_envelope(
    method: str, parameters: Optional[Mapping[str, Any]], snapshot: SessionSnapshot
) -> Dict[str, Any]:
    """Build the request envelope; ``sessionID`` only when a session is set."""
    header: Dict[str, Any] = {"wsKey": snapshot.client_key}
    if snapshot.session_id is not None:
        header["sessionID"] = snapshot.session_id
    return {
        "method": method,
        "parameters": dict(parameters or {}),
        "header": header,
    }


def encode_envelope(
    method: str, parameters: Optional[Mapping[str, Any]], snapshot: SessionSnapshot
) -> bytes:
    """
    Serialize the envelope to the canonical body bytes.

    Keys keep insertion order (method, parameters, header) and the output is
    compact ASCII JSON, so the same call always yields the same bytes.

    Raises:
        ValueError: If a parameter is NaN or infinite
        TypeError: If a parameter is not JSON-serializable
    """
    envelope = build_envelope(method, parameters, snapshot)
    return json.dumps(
        envelope, separators=(",", ":"), ensure_ascii=True, allow_nan=False
    ).encode("utf-8")


def _snapshot_of(session: Union["Session", SessionSnapshot]) -> SessionSnapshot:
    if isinstance(session, SessionSnapshot):
        return session
    return session.snapshot()


class Transport:
    """Stateless signer and HTTP sender; safe to share between sessions."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        total_timeout: float = DEFAULT_TOTAL_TIMEOUT,
        verify_ssl: bool = True,
        user_agent_prefix: str = "gsapi-python",
    ):
        """
        Initialize transport settings.

        Args:
            api_url: Endpoint every call is POSTed to
            connect_timeout: Connect timeout in seconds
            read_timeout: Longest single socket wait in seconds
            total_timeout: Deadline for the whole call, body included, in seconds
            verify_ssl: Verify the server's TLS certificate
            user_agent_prefix: Prefix of the User-Agent; the client key is appended
        """
        self.api_url = api_url
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)
        self.total_timeout = total_timeout
        self.verify_ssl = verify_ssl
        self.user_agent_prefix = user_agent_prefix
        if not verify_ssl:
            logger.warning(
                "TLS certificate verification is disabled; requests are open to interception"
            )

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "Transport":
        """Create a transport from client settings."""
        return cls(
            api_url=settings.api_url,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            total_timeout=settings.total_timeout,
            verify_ssl=settings.verify_ssl,
            user_agent_prefix=settings.user_agent_prefix,
        )

    def user_agent(self, client_key: str) -> str:
        return f"{self.user_agent_prefix}-{client_key}"

    def send(
        self,
        method: str,
        parameters: Optional[Mapping[str, Any]],
        session: Union["Session", SessionSnapshot],
    ) -> Dict[str, Any]:
        """
        Sign and send one remote call.

        Args:
            method: Remote method name (e.g. ``getCountry``)
            parameters: Flat mapping of JSON-serializable values
            session: Session (or snapshot) supplying credentials and session ID

        Returns:
            Decoded response body; callers read ``result`` from it

        Raises:
            ValidationError: If method is empty or parameters cannot be encoded
            TransportError: On non-200 status, timeout or connection failure
            ApiError: If the body carries an ``errors`` payload
            ProtocolError: If a 200 body is not a JSON object
        """
        if not method or not isinstance(method, str):
            raise ValidationError("A method name is required")

        snapshot = _snapshot_of(session)
        try:
            body = encode_envelope(method, parameters, snapshot)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Parameters for {method} are not valid JSON: {e}") from e
        signature = sign(body, snapshot.client_secret)

        logger.debug(
            f"Calling {method} (session attached: {snapshot.session_id is not None})"
        )

        deadline = time.monotonic() + self.total_timeout
        try:
            response = requests.post(
                self.api_url,
                params={"sig": signature},
                data=body,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": self.user_agent(snapshot.client_key),
                },
                timeout=self.timeout,
                verify=self.verify_ssl,
                stream=True,
            )
        except requests.Timeout as e:
            raise TransportError(f"Request to {method} timed out: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to {method} failed: {e}") from e

        try:
            if time.monotonic() > deadline:
                raise TransportError(f"Request to {method} timed out after {self.total_timeout}s")
            if response.status_code != 200:
                logger.warning(f"{method} returned HTTP {response.status_code}")
                raise TransportError(
                    f"Unexpected return code from API: {response.status_code}",
                    status_code=response.status_code,
                )
            content = self._read_body(method, response, deadline)
        finally:
            response.close()

        return self._decode(method, content)

    def _read_body(self, method: str, response: requests.Response, deadline: float) -> bytes:
        """Read the streamed body, failing once the total deadline has passed."""
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise TransportError(
                        f"Request to {method} timed out after {self.total_timeout}s"
                    )
                chunks.append(chunk)
        except requests.RequestException as e:
            raise TransportError(f"Reading response to {method} failed: {e}") from e
        return b"".join(chunks)

    def _decode(self, method: str, content: bytes) -> Dict[str, Any]:
        """Turn a 200 response body into a result body or a typed error."""
        try:
            body = json.loads(content)
        except ValueError as e:
            raise ProtocolError(f"Response to {method} is not valid JSON") from e

        if not isinstance(body, dict):
            raise ProtocolError(f"Response to {method} is not a JSON object")

        errors = body.get("errors")
        if errors is not None:
            error = errors[0] if isinstance(errors, list) and errors else None
            if isinstance(error, dict) and "message" in error and "code" in error:
                logger.warning(f"{method} failed: {error['message']} (code {error['code']})")
                raise ApiError(error["message"], error["code"])
            logger.warning(f"{method} failed with an unrecognised error payload")
            raise ApiError("Unknown Exception")

        return body
