"""SeedDream FAL MCP server - image generation tools for MCP clients."""

__version__ = "0.2.0"

from seedreammcp.config import ServerConfig
from seedreammcp.models.errors import (
    ConfigurationError,
    DownloadError,
    ErrorCode,
    SeedreamError,
    UpstreamError,
    ValidationError,
)
from seedreammcp.models.metrics import GenerationMetrics
from seedreammcp.models.requests import BatchGenerationRequest, ImageGenerationRequest
from seedreammcp.models.responses import BatchOutcome, GenerationResult, ToolResponse
from seedreammcp.models.sizes import AspectRatio, ImageSize, ImageSizePreset, SeedreamVersion
from seedreammcp.providers.base import ImageProvider
from seedreammcp.providers.fal_provider import FalSeedreamProvider
from seedreammcp.services.download_service import DownloadService
from seedreammcp.services.image_service import ImageService
from seedreammcp.services.metrics_service import MetricsService
from seedreammcp.utils.filename_utils import make_filename
from seedreammcp.utils.size_utils import resolve_aspect_ratio, resolve_image_size

__all__ = [
    # Configuration
    "ServerConfig",
    # Errors
    "ErrorCode",
    "SeedreamError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "DownloadError",
    # Request / response types
    "AspectRatio",
    "BatchGenerationRequest",
    "BatchOutcome",
    "GenerationMetrics",
    "GenerationResult",
    "ImageGenerationRequest",
    "ImageSize",
    "ImageSizePreset",
    "SeedreamVersion",
    "ToolResponse",
    # Providers
    "ImageProvider",
    "FalSeedreamProvider",
    # Services
    "DownloadService",
    "ImageService",
    "MetricsService",
    # Utilities
    "make_filename",
    "resolve_aspect_ratio",
    "resolve_image_size",
]
