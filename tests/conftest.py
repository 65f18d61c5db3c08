"""Shared fixtures for the Gemini Image MCP Server tests"""

import base64
from unittest.mock import MagicMock

import pytest

from gemini_client import GeminiImageClient

ENDPOINT = "https://gemini.example.test/v1beta/models/image:generateContent"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")


def make_response(status_code=200, payload=None, text=""):
    """Build a stand-in for requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload if payload is not None else {}
    return response


def image_payload(*images):
    """Gemini response body with one inline image part per (data, mime) pair"""
    parts = [{"text": "Here is your image"}]
    for data, mime_type in images:
        inline = {"data": data}
        if mime_type:
            inline["mimeType"] = mime_type
        parts.append({"inlineData": inline})
    return {"candidates": [{"content": {"parts": parts}}]}


@pytest.fixture
def gemini_client():
    return GeminiImageClient("test-key", ENDPOINT)


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "input.png"
    path.write_bytes(PNG_BYTES)
    return path
