"""Process-wide configuration, read once at startup"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_SERVER_NAME = "gemini-2-5-flash-mcp"
DISPLAY_NAME = "Gemini 2.5 Flash MCP"
SERVER_VERSION = "0.1.0"
DEFAULT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.5-flash-image-preview:generateContent"
)
TRANSPORTS = ("stdio", "http")


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server settings passed to the client and tool registration"""
    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    server_name: str = DEFAULT_SERVER_NAME
    transport: str = "stdio"
    # loopback only; set MCP_HTTP_HOST=0.0.0.0 to listen on all interfaces
    http_host: str = "127.0.0.1"
    http_port: int = 7801
    # exact match, sub-paths are not routed to the transport
    http_path: str = "/mcp"
    http_json_response: bool = False
    log_level: str = "INFO"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def load_config(env: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build a ServerConfig from environment variables.

    When ``env`` is omitted, a ``.env`` file in the working directory is loaded
    first (already-set variables take precedence) and ``os.environ`` is used.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ

    transport = env.get("MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        raise ValueError(f"Invalid MCP_TRANSPORT '{transport}'. Must be one of {TRANSPORTS}")

    raw_port = env.get("MCP_HTTP_PORT", "7801")
    try:
        http_port = int(raw_port)
    except ValueError:
        raise ValueError(f"Invalid MCP_HTTP_PORT '{raw_port}'") from None

    http_path = env.get("MCP_HTTP_PATH", "/mcp")
    if not http_path.startswith("/"):
        http_path = "/" + http_path

    return ServerConfig(
        api_key=env.get("GEMINI_API_KEY", ""),
        endpoint=env.get("GEMINI_IMAGE_ENDPOINT", DEFAULT_ENDPOINT),
        server_name=env.get("MCP_NAME", DEFAULT_SERVER_NAME),
        transport=transport,
        http_host=env.get("MCP_HTTP_HOST", "127.0.0.1"),
        http_port=http_port,
        http_path=http_path,
        http_json_response=_parse_bool(env.get("MCP_HTTP_ENABLE_JSON", "false")),
        log_level=env.get("MCP_LOG_LEVEL", "INFO").upper(),
    )
