"""Filesystem helpers for Gemini Image MCP Server"""

from managers.image_store import extension_for_mime_type, load_base64, save_base64

__all__ = ["extension_for_mime_type", "load_base64", "save_base64"]
