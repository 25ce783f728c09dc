"""
Unit tests for the command-line interface.
"""
import json

import pytest

from gsapi import cli
from tests.fixtures.sample_api_responses import (
    COUNTRY_RESPONSE,
    SONG_SEARCH_RESPONSE,
    START_SESSION_RESPONSE,
)
from tests.helpers import create_mock_response, sent_envelope


class TestBuildParser:
    """Test argument parsing."""

    def test_search_arguments(self):
        args = cli.build_parser().parse_args(["search", "YYZ", "--limit", "5"])
        assert args.command == "search"
        assert args.query == "YYZ"
        assert args.limit == 5
        assert args.config is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestMain:
    """Test the main entry point with requests.post mocked."""

    def test_country(self, sample_config_yaml, mock_post, capsys):
        mock_post.side_effect = [
            create_mock_response(200, START_SESSION_RESPONSE),
            create_mock_response(200, COUNTRY_RESPONSE),
        ]

        cli.main(["--config", sample_config_yaml, "country", "--ip", "8.8.8.8"])

        assert json.loads(capsys.readouterr().out) == COUNTRY_RESPONSE["result"]
        envelope = sent_envelope(mock_post, 1)
        assert envelope["parameters"] == {"ip": "8.8.8.8"}
        assert envelope["header"]["sessionID"] == START_SESSION_RESPONSE["result"]["sessionID"]

    def test_search_from_environment(self, monkeypatch, mock_post, capsys):
        monkeypatch.setenv("GSAPI_CLIENT_KEY", "env_key")
        monkeypatch.setenv("GSAPI_CLIENT_SECRET", "env_secret")
        mock_post.side_effect = [
            create_mock_response(200, START_SESSION_RESPONSE),
            create_mock_response(200, COUNTRY_RESPONSE),
            create_mock_response(200, SONG_SEARCH_RESPONSE),
        ]

        cli.main(["search", "YYZ", "--limit", "1"])

        assert json.loads(capsys.readouterr().out) == SONG_SEARCH_RESPONSE["result"]["songs"]
        assert sent_envelope(mock_post, 2)["parameters"]["limit"] == 1
        assert sent_envelope(mock_post, 2)["header"]["wsKey"] == "env_key"

    def test_missing_credentials_exits(self, mock_post):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["ping"])
        assert exc_info.value.code == 1
        mock_post.assert_not_called()

    def test_api_failure_exits(self, sample_config_yaml, mock_post):
        mock_post.return_value = create_mock_response(403, text="Forbidden")

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--config", sample_config_yaml, "ping"])
        assert exc_info.value.code == 1
