"""Shared pytest fixtures for SeedDream MCP tests."""

from typing import Any

import httpx
import pytest

from seedreammcp.config import ServerConfig
from seedreammcp.models.errors import UpstreamError
from seedreammcp.models.responses import GeneratedImage, GenerationResult
from seedreammcp.services.download_service import DownloadService
from seedreammcp.services.image_service import ImageService
from seedreammcp.services.metrics_service import MetricsService

IMAGE_BYTES = b"\x89PNG\r\n\x1a\nmock_image_data"


class MockImageProvider:
    """Mock image provider for testing."""

    endpoint = "fal-ai/bytedance/seedream/v4/text-to-image"

    def __init__(
        self,
        images_per_call: int = 1,
        seed: int | None = 1234,
        failing_prompts: set[str] | None = None,
        image_urls: list[str] | None = None,
        with_dimensions: bool = True,
    ):
        """
        Initialize mock provider.

        Args:
            images_per_call: Number of images returned per call
            seed: Seed reported back (None to omit it)
            failing_prompts: Prompts that raise UpstreamError
            image_urls: Explicit image URLs to return (overrides images_per_call)
            with_dimensions: Whether images carry width/height
        """
        self.images_per_call = images_per_call
        self.seed = seed
        self.failing_prompts = failing_prompts or set()
        self.image_urls = image_urls
        self.with_dimensions = with_dimensions
        self.calls: list[dict[str, Any]] = []

    async def generate(self, prompt: str, options: dict[str, Any], with_logs: bool = False) -> GenerationResult:
        """Mock generate method."""
        self.calls.append({"prompt": prompt, "options": options, "with_logs": with_logs})

        if prompt in self.failing_prompts:
            raise UpstreamError(f"Mock provider failure for '{prompt}'")

        urls = self.image_urls or [
            f"https://fal.media/files/{len(self.calls)}_{index}.png" for index in range(self.images_per_call)
        ]
        images = [
            GeneratedImage(url=url, width=2048, height=2048) if self.with_dimensions else GeneratedImage(url=url)
            for url in urls
        ]
        return GenerationResult(images=images, seed=self.seed)


def image_transport(request: httpx.Request) -> httpx.Response:
    """Serve fake PNG bytes; any URL containing 'broken' answers 404."""
    if "broken" in str(request.url):
        return httpx.Response(404, text="not found")
    return httpx.Response(200, content=IMAGE_BYTES)


@pytest.fixture
def output_dir(tmp_path):
    """Download directory that does not exist yet."""
    return tmp_path / "images"


@pytest.fixture
def config(output_dir):
    """Configuration with a credential and a temporary output directory."""
    return ServerConfig(fal_key="test-key", output_dir=output_dir)


@pytest.fixture
def download_service(output_dir):
    """Download service backed by an in-memory HTTP transport."""
    return DownloadService(output_dir=output_dir, transport=httpx.MockTransport(image_transport))


@pytest.fixture
def mock_image_provider():
    """Fixture for a working mock image provider."""
    return MockImageProvider()


@pytest.fixture
def metrics_service():
    return MetricsService()


@pytest.fixture
def image_service(config, mock_image_provider, download_service, metrics_service):
    """Image service wired to the mock provider and in-memory downloads."""
    return ImageService(
        config,
        provider=mock_image_provider,
        download_service=download_service,
        metrics_service=metrics_service,
    )
