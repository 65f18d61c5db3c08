import logging
from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from managers.image_store import load_base64
from models.image import DEFAULT_MIME_TYPE, GeneratedImage, ImageInput

logger = logging.getLogger("GeminiImageClient")

ImageLike = Union[ImageInput, Dict[str, Any]]


class GeminiImageError(Exception):
    """Base class for failures while generating an image"""


class ImageInputError(GeminiImageError, ValueError):
    """An input image supplied neither inline data nor a path"""


class GeminiAPIError(GeminiImageError):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error {status_code}: {body}")


class NoImageReturnedError(GeminiImageError):
    def __init__(self):
        super().__init__("No image data returned by Gemini API")


def to_inline_parts(inputs: Optional[Iterable[ImageLike]]) -> List[Dict[str, Any]]:
    """Convert image inputs into ``inline_data`` request parts, keeping their order"""
    if not inputs:
        return []

    parts = []
    for index, raw in enumerate(inputs):
        image = raw if isinstance(raw, ImageInput) else ImageInput.model_validate(raw)
        mime_type = image.mimeType or DEFAULT_MIME_TYPE
        data = image.dataBase64
        if not data and image.path:
            data = load_base64(image.path)
        if not data:
            raise ImageInputError(
                f"Image input {index} requires either dataBase64 or path"
            )
        parts.append({"inline_data": {"mime_type": mime_type, "data": data}})
    return parts


class GeminiImageClient:
    def __init__(self, api_key: str, endpoint: str):
        self.api_key = api_key
        self.endpoint = endpoint

    def generate(self, prompt: str, images: Optional[Iterable[ImageLike]] = None) -> List[GeneratedImage]:
        """Send one generateContent request and return the images it produced"""
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        parts.extend(to_inline_parts(images))

        logger.info("Submitting request to Gemini with %d image part(s)...", len(parts) - 1)
        response = requests.post(
            self.endpoint,
            params={"key": self.api_key},
            json={"contents": [{"parts": parts}]},
            headers={"Content-Type": "application/json"},
        )
        if not 200 <= response.status_code < 300:
            raise GeminiAPIError(response.status_code, response.text)

        results = self._extract_images(response.json())
        if not results:
            raise NoImageReturnedError()
        if len(results) > 1:
            logger.debug("Gemini returned %d images; only the first is used", len(results))
        logger.info("Received %s image from Gemini", results[0].mime_type)
        return results

    def _extract_images(self, payload: Dict[str, Any]) -> List[GeneratedImage]:
        candidates = payload.get("candidates") or []
        if not candidates:
            return []
        content = candidates[0].get("content") or {}
        images = []
        for part in content.get("parts") or []:
            inline = part.get("inlineData") or {}
            if inline.get("data"):
                images.append(
                    GeneratedImage(
                        data=inline["data"],
                        mime_type=inline.get("mimeType") or DEFAULT_MIME_TYPE,
                    )
                )
        return images
