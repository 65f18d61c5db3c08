import logging
import sys

from mcp.server.fastmcp import FastMCP

from gemini_client import GeminiImageClient
from models.config import DISPLAY_NAME, SERVER_VERSION, ServerConfig, load_config
from tools.images import register_image_tools

logger = logging.getLogger("MCP_Server")


def configure_logging(level: str = "INFO"):
    # stderr only: stdout carries the stdio transport
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format=f"[{DISPLAY_NAME}] %(levelname)s %(name)s: %(message)s",
    )


def create_server(config: ServerConfig) -> FastMCP:
    """Build the FastMCP server and register the image tools on it"""
    if not config.api_key:
        logger.error("Missing GEMINI_API_KEY environment variable.")

    mcp = FastMCP(
        config.server_name,
        host=config.http_host,
        port=config.http_port,
        streamable_http_path=config.http_path,
        json_response=config.http_json_response,
        log_level=config.log_level,
    )
    # reported to clients in the initialize result
    mcp._mcp_server.version = SERVER_VERSION
    register_image_tools(mcp, GeminiImageClient(config.api_key, config.endpoint))
    return mcp


def run(config: ServerConfig):
    mcp = create_server(config)
    if config.transport == "http":
        logger.info(
            "HTTP transport listening on http://%s:%s%s",
            config.http_host,
            config.http_port,
            config.http_path,
        )
        mcp.run(transport="streamable-http")
    else:
        logger.info("Starting '%s' v%s over stdio", config.server_name, SERVER_VERSION)
        mcp.run(transport="stdio")


def main():
    """Console entry point"""
    try:
        config = load_config()
        configure_logging(config.log_level)
        run(config)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:
        configure_logging()
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
