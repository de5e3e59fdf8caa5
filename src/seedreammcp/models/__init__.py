"""Models package for the SeedDream MCP server."""

from seedreammcp.models.errors import (
    ConfigurationError,
    DownloadError,
    ErrorCode,
    SeedreamError,
    UpstreamError,
    ValidationError,
    is_upstream,
)
from seedreammcp.models.metrics import GenerationMetrics
from seedreammcp.models.requests import BatchGenerationRequest, ImageGenerationRequest
from seedreammcp.models.responses import (
    BatchFailure,
    BatchOutcome,
    BatchSuccess,
    DownloadedImage,
    GeneratedImage,
    GenerationResult,
    ToolResponse,
)
from seedreammcp.models.sizes import AspectRatio, ImageSize, ImageSizePreset, SeedreamVersion

__all__ = [
    "AspectRatio",
    "BatchFailure",
    "BatchGenerationRequest",
    "BatchOutcome",
    "BatchSuccess",
    "ConfigurationError",
    "DownloadError",
    "DownloadedImage",
    "ErrorCode",
    "GeneratedImage",
    "GenerationMetrics",
    "GenerationResult",
    "ImageGenerationRequest",
    "ImageSize",
    "ImageSizePreset",
    "SeedreamError",
    "SeedreamVersion",
    "ToolResponse",
    "UpstreamError",
    "ValidationError",
    "is_upstream",
]
