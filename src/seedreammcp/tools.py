"""MCP tool definitions for the active SeedDream version."""

from typing import Any

from mcp.types import Tool

from seedreammcp.models.requests import MAX_BATCH_PROMPTS
from seedreammcp.models.sizes import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_PRESET,
    MAX_DIMENSION,
    MIN_DIMENSION,
    AspectRatio,
    ImageSizePreset,
    SeedreamVersion,
)

GENERATE_IMAGE = "generate_image"
GENERATE_IMAGE_BATCH = "generate_image_batch"


def _image_size_schema(description: str) -> dict[str, Any]:
    dimension = {"type": "integer", "minimum": MIN_DIMENSION, "maximum": MAX_DIMENSION}
    return {
        "oneOf": [
            {
                "type": "string",
                "enum": [preset.value for preset in ImageSizePreset],
                "description": "Preset image size",
            },
            {
                "type": "object",
                "properties": {
                    "width": {**dimension, "description": "Image width in pixels"},
                    "height": {**dimension, "description": "Image height in pixels"},
                },
                "required": ["width", "height"],
                "description": "Custom image dimensions",
            },
        ],
        "description": description,
        "default": DEFAULT_PRESET.value,
    }


def _aspect_ratio_schema(description: str) -> dict[str, Any]:
    return {
        "type": "string",
        "enum": [ratio.value for ratio in AspectRatio],
        "description": description,
        "default": DEFAULT_ASPECT_RATIO.value,
    }


def _safety_schema(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description, "default": True}


def _single_tool(version: SeedreamVersion) -> Tool:
    properties: dict[str, Any] = {
        "prompt": {
            "type": "string",
            "description": "The text prompt used to generate the image. Be descriptive for best results.",
        },
    }

    if version == SeedreamVersion.V3:
        properties["aspect_ratio"] = _aspect_ratio_schema("The aspect ratio of the generated image")
        properties["guidance_scale"] = {
            "type": "number",
            "description": "How closely the image follows the prompt (1-10)",
            "minimum": 1,
            "maximum": 10,
            "default": 2.5,
        }
    else:
        properties["image_size"] = _image_size_schema(
            f"The size of the generated image. Can be a preset or custom dimensions "
            f"({MIN_DIMENSION}-{MAX_DIMENSION}px)"
        )

    properties["num_images"] = {
        "type": "integer",
        "description": "Number of separate model generations to be run with the prompt",
        "minimum": 1,
        "maximum": 6,
        "default": 1,
    }
    if version == SeedreamVersion.V4:
        properties["max_images"] = {
            "type": "integer",
            "description": (
                "Maximum images per generation. Total images will be between "
                "num_images and max_images*num_images"
            ),
            "minimum": 1,
            "maximum": 6,
            "default": 1,
        }
    properties["seed"] = {
        "type": "integer",
        "description": (
            "Random seed to control the stochasticity of image generation. "
            "Use the same seed for reproducible results."
        ),
    }
    if version == SeedreamVersion.V4:
        properties["sync_mode"] = {
            "type": "boolean",
            "description": (
                "If true, waits for image generation and upload before returning "
                "response (higher latency but direct access)"
            ),
            "default": False,
        }
    properties["enable_safety_checker"] = _safety_schema("Enable safety checker to filter inappropriate content")

    return Tool(
        name=GENERATE_IMAGE,
        description=(
            f"Generate images using Bytedance's {version.display_name} model. Images are "
            "downloaded to the local output directory and their paths are returned."
        ),
        inputSchema={"type": "object", "properties": properties, "required": ["prompt"]},
    )


def _batch_tool(version: SeedreamVersion) -> Tool:
    properties: dict[str, Any] = {
        "prompts": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of text prompts to generate images for",
            "minItems": 1,
            "maxItems": MAX_BATCH_PROMPTS,
        },
    }
    if version == SeedreamVersion.V3:
        properties["aspect_ratio"] = _aspect_ratio_schema("The aspect ratio for all generated images")
    else:
        properties["image_size"] = _image_size_schema("The size for all generated images")
    properties["enable_safety_checker"] = _safety_schema("Enable safety checker for all generations")

    return Tool(
        name=GENERATE_IMAGE_BATCH,
        description=(
            f"Generate multiple images with different prompts in a single request using "
            f"{version.display_name}."
        ),
        inputSchema={"type": "object", "properties": properties, "required": ["prompts"]},
    )


def get_tools(version: SeedreamVersion = SeedreamVersion.V4) -> list[Tool]:
    """Tools advertised to MCP clients for the given model version."""
    return [_single_tool(version), _batch_tool(version)]
