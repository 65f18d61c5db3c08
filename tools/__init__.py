"""MCP tool registration for Gemini Image MCP Server"""

from tools.images import ImageTools, register_image_tools

__all__ = ["ImageTools", "register_image_tools"]
