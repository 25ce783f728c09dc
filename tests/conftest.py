"""
Shared pytest fixtures for gsapi tests.
"""
import os

import pytest

from gsapi.api import GroovesharkAPI
from gsapi.config import ClientSettings
from gsapi.session import Session
from gsapi.transport import Transport

from tests.helpers import create_mock_response

TEST_CLIENT_KEY = "fastest963_test"
TEST_CLIENT_SECRET = "1a0c452389fd4147905d753a31d1b456"

# Read at import time, before the autouse fixture clears them
_LIVE_KEY = os.getenv("GSAPI_CLIENT_KEY")
_LIVE_SECRET = os.getenv("GSAPI_CLIENT_SECRET")


@pytest.fixture(autouse=True)
def clear_credential_env(monkeypatch):
    """Keep real credentials in the environment out of unit tests."""
    monkeypatch.delenv("GSAPI_CLIENT_KEY", raising=False)
    monkeypatch.delenv("GSAPI_CLIENT_SECRET", raising=False)


@pytest.fixture
def transport():
    """Create a transport with default settings."""
    return Transport()


@pytest.fixture
def session(transport):
    """Create an anonymous session."""
    return Session(TEST_CLIENT_KEY, TEST_CLIENT_SECRET, transport=transport)


@pytest.fixture
def api(session):
    """Create an API facade over the test session."""
    return GroovesharkAPI(session)


@pytest.fixture
def mock_post(mocker):
    """Patch requests.post as seen by the transport; answers 200 with an empty result."""
    post = mocker.patch("gsapi.transport.requests.post")
    post.return_value = create_mock_response(200, {"result": {}})
    return post


@pytest.fixture
def sample_client_settings():
    """Create sample client settings."""
    return ClientSettings(
        client_key=TEST_CLIENT_KEY,
        client_secret=TEST_CLIENT_SECRET,
        connect_timeout=2,
        read_timeout=6,
    )


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create sample config YAML file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
version: 1.0
client:
  client_key: {TEST_CLIENT_KEY}
  client_secret: {TEST_CLIENT_SECRET}
  connect_timeout: 3
  read_timeout: 10
  verify_ssl: true
  log_level: DEBUG
""")
    return str(config_file)


@pytest.fixture
def live_credentials():
    """Get live API credentials from the environment."""
    return {
        "client_key": _LIVE_KEY,
        "client_secret": _LIVE_SECRET,
    }
