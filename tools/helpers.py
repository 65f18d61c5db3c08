"""Shared helper functions for tool implementations"""

from typing import List, Optional, Union

from mcp.types import ImageContent, TextContent

from models.image import GeneratedImage


def build_image_reply(
    verb: str,
    image: GeneratedImage,
    saved_path: Optional[str] = None,
) -> List[Union[TextContent, ImageContent]]:
    """Build the three-part tool reply: status line, inline image, data URL.

    Args:
        verb: Action word for the status line (e.g. "Generated", "Edited")
        image: First image returned by the Gemini API
        saved_path: Absolute path the image was written to, if any
    """
    status = f"{verb} image"
    if saved_path:
        status += f" saved to {saved_path}"
    return [
        TextContent(type="text", text=status),
        ImageContent(type="image", mimeType=image.mime_type, data=image.data),
        TextContent(type="text", text=image.data_url),
    ]
