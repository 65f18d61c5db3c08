"""Tests for the Gemini request assembly and response parsing"""

from unittest.mock import patch

import pytest

from gemini_client import (
    GeminiAPIError,
    ImageInputError,
    NoImageReturnedError,
    to_inline_parts,
)
from models.image import GeneratedImage, ImageInput
from tests.conftest import ENDPOINT, PNG_B64, image_payload, make_response


class TestToInlineParts:
    """Tests for to_inline_parts"""

    def test_empty_and_none(self):
        assert to_inline_parts(None) == []
        assert to_inline_parts([]) == []

    def test_inline_data_with_default_mime(self):
        parts = to_inline_parts([ImageInput(dataBase64="AAAA")])
        assert parts == [{"inline_data": {"mime_type": "image/png", "data": "AAAA"}}]

    def test_path_only_reads_file(self, png_file):
        with patch("gemini_client.load_base64", return_value=PNG_B64) as mock_load:
            parts = to_inline_parts([ImageInput(path=str(png_file))])
        mock_load.assert_called_once_with(str(png_file))
        assert parts == [{"inline_data": {"mime_type": "image/png", "data": PNG_B64}}]

    def test_path_with_explicit_mime(self, png_file):
        parts = to_inline_parts([{"path": str(png_file), "mimeType": "image/jpeg"}])
        assert parts[0]["inline_data"] == {"mime_type": "image/jpeg", "data": PNG_B64}

    def test_inline_data_wins_over_path(self, tmp_path):
        with patch("gemini_client.load_base64") as mock_load:
            parts = to_inline_parts([ImageInput(dataBase64="BBBB", path=str(tmp_path / "x.png"))])
        mock_load.assert_not_called()
        assert parts[0]["inline_data"]["data"] == "BBBB"

    def test_order_preserved(self):
        parts = to_inline_parts([{"dataBase64": "first"}, {"dataBase64": "second"}])
        assert [p["inline_data"]["data"] for p in parts] == ["first", "second"]

    def test_missing_data_and_path(self):
        with pytest.raises(ImageInputError, match="Image input 1"):
            to_inline_parts([ImageInput(dataBase64="AAAA"), ImageInput(mimeType="image/png")])

    def test_missing_file_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            to_inline_parts([ImageInput(path=str(tmp_path / "missing.png"))])


class TestGenerate:
    """Tests for GeminiImageClient.generate"""

    def test_request_shape(self, gemini_client):
        response = make_response(payload=image_payload((PNG_B64, "image/png")))
        with patch("gemini_client.requests.post", return_value=response) as mock_post:
            gemini_client.generate("a red cube", [ImageInput(dataBase64="AAAA", mimeType="image/jpeg")])

        args, kwargs = mock_post.call_args
        assert args == (ENDPOINT,)
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["json"] == {
            "contents": [
                {
                    "parts": [
                        {"text": "a red cube"},
                        {"inline_data": {"mime_type": "image/jpeg", "data": "AAAA"}},
                    ]
                }
            ]
        }

    def test_returns_images_in_order(self, gemini_client):
        payload = image_payload(("one", "image/jpeg"), ("two", None))
        with patch("gemini_client.requests.post", return_value=make_response(payload=payload)):
            images = gemini_client.generate("prompt")
        assert images == [
            GeneratedImage(data="one", mime_type="image/jpeg"),
            GeneratedImage(data="two", mime_type="image/png"),
        ]

    def test_non_success_status(self, gemini_client):
        response = make_response(status_code=403, text='{"error": "API key not valid"}')
        with patch("gemini_client.requests.post", return_value=response):
            with pytest.raises(GeminiAPIError) as exc_info:
                gemini_client.generate("prompt")
        assert exc_info.value.status_code == 403
        assert "403" in str(exc_info.value)
        assert "API key not valid" in str(exc_info.value)
        response.json.assert_not_called()

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": [{"text": "I cannot draw that"}]}}]},
        ],
    )
    def test_no_image_returned(self, gemini_client, payload):
        with patch("gemini_client.requests.post", return_value=make_response(payload=payload)):
            with pytest.raises(NoImageReturnedError):
                gemini_client.generate("prompt", [ImageInput(dataBase64="AAAA")])

    def test_invalid_input_fails_before_request(self, gemini_client):
        with patch("gemini_client.requests.post") as mock_post:
            with pytest.raises(ImageInputError):
                gemini_client.generate("prompt", [ImageInput()])
        mock_post.assert_not_called()


def test_generated_image_data_url():
    image = GeneratedImage(data="QUJD", mime_type="image/jpeg")
    assert image.data_url == "data:image/jpeg;base64,QUJD"
