"""MCP server exposing the SeedDream tools over stdio."""

import asyncio
import logging
import sys
from typing import Any, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from seedreammcp import __version__
from seedreammcp.config import FAL_KEY_ENV, ServerConfig
from seedreammcp.models.responses import ToolResponse
from seedreammcp.services.image_service import ImageService
from seedreammcp.services.metrics_service import MetricsService
from seedreammcp.tools import GENERATE_IMAGE, GENERATE_IMAGE_BATCH, get_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "seedream-fal-server"


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    """Wrap a ToolResponse as exactly one text block plus the error flag."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=response.text)],
        isError=response.is_error,
    )


class SeedreamToolServer:
    """Binds the image service to an MCP low-level Server."""

    def __init__(self, config: ServerConfig, image_service: Optional[ImageService] = None):
        self.config = config
        self.metrics_service = MetricsService()
        self.image_service = image_service or ImageService(config, metrics_service=self.metrics_service)
        self.server = Server(SERVER_NAME, version=__version__)

        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

    async def list_tools(self) -> list[types.Tool]:
        """List the tools for the configured model version."""
        return get_tools(self.config.model_version)

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        """Dispatch a tool call; failures come back as error results."""
        if name == GENERATE_IMAGE:
            response = await self.image_service.generate_image(arguments)
        elif name == GENERATE_IMAGE_BATCH:
            response = await self.image_service.generate_image_batch(arguments)
        else:
            response = ToolResponse.failure(f"Unknown tool: {name}")
        return to_call_tool_result(response)

    async def run(self) -> None:
        """Serve requests over stdio until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{self.config.model_version.display_name} FAL MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def configure_logging(level: str) -> None:
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


async def serve(config: ServerConfig) -> None:
    if not config.has_credentials:
        logger.error(f"Error: {FAL_KEY_ENV} environment variable is required")
        logger.error(f"Please set your FAL API key: export {FAL_KEY_ENV}=your_fal_key_here")

    await SeedreamToolServer(config).run()


def main() -> None:
    """Console entry point."""
    config = ServerConfig.from_env()
    configure_logging(config.log_level)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down gracefully...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
