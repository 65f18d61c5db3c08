"""Data models for Gemini Image MCP Server"""

from models.config import ServerConfig, load_config
from models.image import DEFAULT_MIME_TYPE, GeneratedImage, ImageInput

__all__ = ["DEFAULT_MIME_TYPE", "GeneratedImage", "ImageInput", "ServerConfig", "load_config"]
