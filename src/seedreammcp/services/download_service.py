"""Download service persisting generated images to the local output directory."""

import logging
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os
import httpx

from seedreammcp.models.errors import DownloadError
from seedreammcp.models.responses import DownloadedImage, GeneratedImage
from seedreammcp.models.sizes import ImageSize
from seedreammcp.utils.filename_utils import make_filename

logger = logging.getLogger(__name__)


class DownloadService:
    """Service for streaming remote images to disk."""

    def __init__(
        self,
        output_dir: Path,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize download service.

        Args:
            output_dir: Directory images are written to (created on demand)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self.output_dir = Path(output_dir)
        self.timeout = timeout
        self._transport = transport

    async def download_image(self, url: str, filename: str) -> Path:
        """
        Stream one image to ``output_dir / filename``.

        Args:
            url: Remote image URL
            filename: Target filename inside the output directory

        Returns:
            Absolute path of the written file

        Raises:
            DownloadError: Non-success HTTP status, transport failure or write failure
        """
        try:
            # Concurrent batch downloads may race here; exist_ok makes that safe
            await aiofiles.os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise DownloadError(f"Cannot create output directory {self.output_dir}: {e}", original_exception=e)

        file_path = (self.output_dir / filename).resolve()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise DownloadError(f"Failed to download image: {response.status_code}")
                    await self._write_stream(response, file_path)
        except DownloadError:
            raise
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DownloadError(f"Failed to download image: {e}", original_exception=e)

        return file_path

    async def _write_stream(self, response: httpx.Response, file_path: Path) -> None:
        """Write the body chunk by chunk, removing the partial file on failure."""
        try:
            async with aiofiles.open(file_path, "wb") as f:
                async for chunk in response.aiter_bytes():
                    await f.write(chunk)
        except (OSError, httpx.HTTPError) as e:
            if await aiofiles.os.path.exists(file_path):
                await aiofiles.os.remove(file_path)
            raise DownloadError(f"Failed to save image to {file_path}: {e}", original_exception=e)

    async def download_all(
        self,
        images: list[GeneratedImage],
        prompt: str,
        seed: Optional[int],
        fallback_size: Optional[ImageSize] = None,
    ) -> list[DownloadedImage]:
        """
        Download every image in order; one failure never stops the rest.

        Args:
            images: Images returned by the model
            prompt: Prompt used for filenames
            seed: Seed reported by the model
            fallback_size: Requested size, reported when the model omits dimensions

        Returns:
            One DownloadedImage per input image, in the same order
        """
        results: list[DownloadedImage] = []

        for index, image in enumerate(images, start=1):
            filename = make_filename(prompt, index, seed)
            width, height = image.width, image.height
            if not (width and height) and fallback_size is not None:
                width, height = fallback_size.width, fallback_size.height

            try:
                local_path = await self.download_image(image.url, filename)
            except DownloadError as e:
                logger.warning(f"Failed to download image {index}: {e.message}")
                results.append(
                    DownloadedImage(source_url=image.url, error=e.message, width=width, height=height)
                )
                continue

            logger.info(f"Downloaded: {filename}")
            results.append(
                DownloadedImage(source_url=image.url, local_path=local_path, width=width, height=height)
            )

        return results
