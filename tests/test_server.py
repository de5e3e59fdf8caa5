"""Tests for the MCP tool server wiring."""

import pytest
from mcp import types

from seedreammcp.config import ServerConfig
from seedreammcp.models.responses import ToolResponse
from seedreammcp.models.sizes import SeedreamVersion
from seedreammcp.server import SeedreamToolServer, to_call_tool_result
from seedreammcp.services.image_service import ImageService
from seedreammcp.tools import GENERATE_IMAGE, GENERATE_IMAGE_BATCH, get_tools

from conftest import MockImageProvider


def test_to_call_tool_result_has_one_text_block():
    result = to_call_tool_result(ToolResponse.failure("Error generating image: boom"))

    assert isinstance(result, types.CallToolResult)
    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text == "Error generating image: boom"


@pytest.mark.asyncio
async def test_list_tools_exposes_two_tools(config):
    server = SeedreamToolServer(config)

    tools = await server.list_tools()

    assert [tool.name for tool in tools] == [GENERATE_IMAGE, GENERATE_IMAGE_BATCH]
    assert tools[0].inputSchema["required"] == ["prompt"]
    assert tools[1].inputSchema["required"] == ["prompts"]
    assert tools[1].inputSchema["properties"]["prompts"]["maxItems"] == 5


@pytest.mark.asyncio
async def test_missing_credential_keeps_serving(tmp_path):
    """A call without FAL_KEY is an error result; listing tools still works afterwards."""
    server = SeedreamToolServer(ServerConfig(fal_key=None, output_dir=tmp_path / "images"))

    result = await server.call_tool(GENERATE_IMAGE, {"prompt": "A red dragon"})
    tools = await server.list_tools()

    assert result.isError is True
    assert "FAL_KEY" in result.content[0].text
    assert len(tools) == 2


@pytest.mark.asyncio
async def test_call_tool_routes_to_image_service(config, mock_image_provider, download_service):
    service = ImageService(config, provider=mock_image_provider, download_service=download_service)
    server = SeedreamToolServer(config, image_service=service)

    single = await server.call_tool(GENERATE_IMAGE, {"prompt": "A red dragon"})
    batch = await server.call_tool(GENERATE_IMAGE_BATCH, {"prompts": ["a", "b"]})

    assert single.isError is False
    assert single.content[0].text.startswith("Successfully generated")
    assert batch.isError is False
    assert batch.content[0].text.startswith("Batch image generation completed")
    assert len(mock_image_provider.calls) == 3


@pytest.mark.asyncio
async def test_call_tool_unknown_name(config):
    server = SeedreamToolServer(config)

    result = await server.call_tool("make_video", {})

    assert result.isError is True
    assert result.content[0].text == "Unknown tool: make_video"


def test_v4_tool_schema_offers_presets_and_custom_size():
    single, batch = get_tools(SeedreamVersion.V4)

    size_schema = single.inputSchema["properties"]["image_size"]
    assert "square_1280" in size_schema["oneOf"][0]["enum"]
    assert size_schema["oneOf"][1]["properties"]["width"]["maximum"] == 4096
    assert size_schema["default"] == "square_1280"
    assert "aspect_ratio" not in single.inputSchema["properties"]
    assert "image_size" in batch.inputSchema["properties"]


def test_v3_tool_schema_offers_aspect_ratios():
    single, batch = get_tools(SeedreamVersion.V3)

    ratio_schema = single.inputSchema["properties"]["aspect_ratio"]
    assert len(ratio_schema["enum"]) == 8
    assert "guidance_scale" in single.inputSchema["properties"]
    assert "image_size" not in single.inputSchema["properties"]
    assert "max_images" not in single.inputSchema["properties"]
    assert "aspect_ratio" in batch.inputSchema["properties"]
    assert "SeedDream 3.0" in single.description


async def send_call_tool(server: SeedreamToolServer, name: str, arguments: dict) -> types.CallToolResult:
    handler = server.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


@pytest.mark.asyncio
async def test_protocol_handlers_are_registered(config, download_service):
    """Requests dispatched through the MCP handler table reach the tool server."""
    provider = MockImageProvider(failing_prompts={"bad"})
    service = ImageService(config, provider=provider, download_service=download_service)
    server = SeedreamToolServer(config, image_service=service)

    assert types.ListToolsRequest in server.server.request_handlers

    batch = await send_call_tool(server, GENERATE_IMAGE_BATCH, {"prompts": ["good", "bad"]})
    too_many = await send_call_tool(server, GENERATE_IMAGE_BATCH, {"prompts": ["p"] * 6})
    unknown = await send_call_tool(server, "make_video", {})

    assert batch.isError is False
    assert len(batch.content) == 1
    assert "Failed Generations:" in batch.content[0].text
    assert too_many.isError is True
    assert unknown.isError is True
