"""
Test helper functions and utilities.
"""
import json
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import requests


def create_mock_response(
    status_code: int = 200,
    body: Optional[Any] = None,
    text: Optional[str] = None,
    chunks: Optional[List[bytes]] = None,
) -> Mock:
    """
    Create a mock streamed requests.Response.

    Args:
        status_code: HTTP status code
        body: Object served JSON-encoded as the body
        text: Raw body, served as-is (need not be valid JSON)
        chunks: Raw body split into the chunks ``iter_content`` yields

    Returns:
        Mock response
    """
    if chunks is None:
        raw = text if text is not None else json.dumps(body)
        chunks = [raw.encode("utf-8")]

    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.iter_content.side_effect = lambda *args, **kwargs: iter(chunks)
    return response


def sent_envelope(mock_post: Mock, call_index: int = -1) -> Dict[str, Any]:
    """Decode the JSON envelope of a captured requests.post call."""
    call = mock_post.call_args_list[call_index]
    return json.loads(call.kwargs["data"])
