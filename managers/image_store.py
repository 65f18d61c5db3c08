"""Reading and writing base64 image payloads on the local filesystem"""

import base64
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger("MCP_Server")


def extension_for_mime_type(mime_type: str) -> str:
    """Map a MIME type to the file extension used when saving"""
    return ".jpg" if mime_type == "image/jpeg" else ".png"


def load_base64(path: str) -> str:
    """Read a file (relative paths resolve against the working directory) as base64"""
    full_path = Path(path).resolve()
    data = full_path.read_bytes()
    logger.debug(f"Loaded {len(data)} bytes from {full_path}")
    return base64.b64encode(data).decode("ascii")


def save_base64(data: str, mime_type: str, target_path: Optional[str]) -> Optional[str]:
    """Decode a base64 payload and write it to ``target_path``.

    Returns the absolute path written, or None when no target was given.
    An extension already present on the target is kept; otherwise one is
    derived from the MIME type. Existing files are overwritten.
    """
    if not target_path:
        return None

    extension = os.path.splitext(target_path)[1] or extension_for_mime_type(mime_type)
    if not target_path.endswith(extension):
        target_path = f"{target_path}{extension}"

    resolved = Path(target_path).resolve()
    resolved.write_bytes(base64.b64decode(data))
    logger.info(f"Saved image to {resolved}")
    return str(resolved)
