"""Image generation tools backed by the Gemini generateContent endpoint"""

import asyncio
import logging
from typing import Annotated, Any, Dict, List, Optional, Sequence, Union

from mcp.server.fastmcp import FastMCP
from mcp.types import ImageContent, TextContent
from pydantic import Field

from gemini_client import GeminiImageClient, ImageInputError
from managers.image_store import save_base64
from models.image import ImageInput
from tools.helpers import build_image_reply

logger = logging.getLogger("MCP_Server")

DEFAULT_STYLE_TRANSFER_PROMPT = (
    "Apply the style of the second image to the first image while preserving the original content"
)
MIN_COMPOSE_IMAGES = 2

ToolReply = List[Union[TextContent, ImageContent]]
ImageArg = Union[ImageInput, Dict[str, Any]]


def _coerce_image(value: ImageArg) -> ImageInput:
    if isinstance(value, ImageInput):
        return value
    return ImageInput.model_validate(value)


class ImageTools:
    """The four image tools; each call is an independent request/response"""

    def __init__(self, client: GeminiImageClient):
        self.client = client

    async def _run(
        self,
        tool_name: str,
        verb: str,
        prompt: str,
        images: Sequence[ImageInput],
        save_to_file_path: Optional[str],
    ) -> ToolReply:
        try:
            results = await asyncio.to_thread(self.client.generate, prompt, list(images))
            first = results[0]
            saved_path = await asyncio.to_thread(
                save_base64, first.data, first.mime_type, save_to_file_path
            )
            return build_image_reply(verb, first, saved_path)
        except Exception:
            logger.exception("Tool '%s' failed", tool_name)
            raise

    async def generate_image(
        self,
        prompt: Annotated[str, Field(description="Detailed scene description. Use photographic terms for photorealism.")],
        saveToFilePath: Annotated[Optional[str], Field(description="Optional path to save the image (png/jpeg by extension)")] = None,
    ) -> ToolReply:
        """Generate an image from a text prompt using Gemini 2.5 Flash Image"""
        return await self._run("generate_image", "Generated", prompt, [], saveToFilePath)

    async def edit_image(
        self,
        prompt: Annotated[str, Field(description="Describe the edit; the model matches original style and lighting.")],
        image: Annotated[ImageInput, Field(description="One input image")],
        saveToFilePath: Annotated[Optional[str], Field(description="Optional path to save the edited image")] = None,
    ) -> ToolReply:
        """Edit an image using a prompt. Provide one input image via base64 or file path."""
        return await self._run(
            "edit_image", "Edited", prompt, [_coerce_image(image)], saveToFilePath
        )

    async def compose_images(
        self,
        prompt: Annotated[str, Field(description="Describe how to compose the elements of the input images.")],
        images: Annotated[List[ImageInput], Field(min_length=MIN_COMPOSE_IMAGES, description="Input images to combine")],
        saveToFilePath: Annotated[Optional[str], Field(description="Optional path to save the composed image")] = None,
    ) -> ToolReply:
        """Compose a new image using multiple input images and a guiding prompt."""
        if len(images) < MIN_COMPOSE_IMAGES:
            raise ImageInputError(
                f"compose_images requires at least {MIN_COMPOSE_IMAGES} images, got {len(images)}"
            )
        return await self._run(
            "compose_images",
            "Composed",
            prompt,
            [_coerce_image(image) for image in images],
            saveToFilePath,
        )

    async def style_transfer(
        self,
        baseImage: Annotated[ImageInput, Field(description="Image whose content is preserved")],
        styleImage: Annotated[ImageInput, Field(description="Image whose style is applied")],
        prompt: Annotated[Optional[str], Field(description="Optional additional instruction for the style transfer.")] = None,
        saveToFilePath: Annotated[Optional[str], Field(description="Optional path to save the output")] = None,
    ) -> ToolReply:
        """Transfer style from a style image to a base image, guided by an optional prompt."""
        return await self._run(
            "style_transfer",
            "Style transferred",
            prompt if prompt is not None else DEFAULT_STYLE_TRANSFER_PROMPT,
            [_coerce_image(baseImage), _coerce_image(styleImage)],
            saveToFilePath,
        )


def register_image_tools(mcp: FastMCP, client: GeminiImageClient) -> ImageTools:
    """Register the image tools with the MCP server"""
    image_tools = ImageTools(client)
    for handler in (
        image_tools.generate_image,
        image_tools.edit_image,
        image_tools.compose_images,
        image_tools.style_transfer,
    ):
        name = handler.__name__
        mcp.tool(name=name, description=handler.__doc__, structured_output=False)(handler)
        logger.info("Registered MCP tool '%s'", name)
    return image_tools
