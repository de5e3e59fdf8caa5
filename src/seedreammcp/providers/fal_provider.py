"""Fal.ai SeedDream image generation provider."""

import logging
from typing import Any, Optional

import fal_client
import httpx
import pydantic

from seedreammcp.models.errors import ErrorCode, UpstreamError
from seedreammcp.models.responses import GenerationResult
from seedreammcp.models.sizes import AspectRatio, ImageSize, SeedreamVersion

logger = logging.getLogger(__name__)


def build_arguments(
    version: SeedreamVersion,
    *,
    size: Optional[ImageSize] = None,
    aspect_ratio: Optional[AspectRatio] = None,
    num_images: int = 1,
    max_images: int = 1,
    seed: Optional[int] = None,
    sync_mode: bool = False,
    enable_safety_checker: bool = True,
    guidance_scale: float = 2.5,
) -> dict[str, Any]:
    """
    Build the model input (without the prompt) for a SeedDream version.

    SeedDream 4.0 takes explicit dimensions plus num_images/max_images and
    sync_mode; SeedDream 3.0 takes an aspect ratio and a guidance scale.
    ``seed`` is only sent when the caller chose one.
    """
    if version == SeedreamVersion.V3:
        arguments: dict[str, Any] = {
            "aspect_ratio": (aspect_ratio or AspectRatio.SQUARE).value,
            "guidance_scale": guidance_scale,
            "num_images": num_images,
            "enable_safety_checker": enable_safety_checker,
        }
    else:
        if size is None:
            raise ValueError("SeedDream 4.0 requires a resolved image size")
        arguments = {
            "image_size": size.as_dict(),
            "num_images": num_images,
            "max_images": max_images,
            "sync_mode": sync_mode,
            "enable_safety_checker": enable_safety_checker,
        }

    if seed is not None:
        arguments["seed"] = seed
    return arguments


class FalSeedreamProvider:
    """Image provider calling SeedDream text-to-image on Fal.ai."""

    def __init__(
        self,
        api_key: Optional[str],
        version: SeedreamVersion = SeedreamVersion.V4,
        client: Optional[fal_client.AsyncClient] = None,
    ):
        """
        Initialize Fal provider.

        Args:
            api_key: Fal.ai API key (required)
            version: SeedDream generation to call
            client: Pre-built fal_client.AsyncClient (built from api_key if omitted)

        Raises:
            ValueError: If no API key is given
        """
        if not api_key:
            raise ValueError("FAL_KEY environment variable or api_key parameter is required")

        self.version = version
        # Credential stays on the client instance, never in os.environ
        self._client = client or fal_client.AsyncClient(key=api_key)

    @property
    def endpoint(self) -> str:
        return self.version.endpoint

    def _on_queue_update(self, update: Any) -> None:
        # Observational only: progress must never alter the result
        if isinstance(update, fal_client.InProgress):
            for log in update.logs or []:
                message = log.get("message") if isinstance(log, dict) else log
                if message:
                    logger.info(f"[{self.version.display_name}] {message}")

    async def generate(
        self,
        prompt: str,
        options: dict[str, Any],
        with_logs: bool = False,
    ) -> GenerationResult:
        """
        Generate images using SeedDream on Fal.ai.

        Args:
            prompt: Text prompt for image generation
            options: Output of build_arguments for this provider's version
            with_logs: Stream queue logs into the server log

        Returns:
            GenerationResult with image URLs and the seed used

        Raises:
            UpstreamError: For every failure of the single attempt
        """
        arguments = {"prompt": prompt, **options}

        try:
            fal_result = await self._client.subscribe(
                self.endpoint,
                arguments=arguments,
                with_logs=with_logs,
                on_queue_update=self._on_queue_update if with_logs else None,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamError(
                f"Fal.ai request timed out: {e}",
                ErrorCode.PROVIDER_TIMEOUT,
                original_exception=e,
            )
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Fal.ai returned error {e.response.status_code}: {e}",
                _classify_status(e.response.status_code),
                original_exception=e,
            )
        except Exception as e:
            raise UpstreamError(
                str(e) or e.__class__.__name__,
                _classify_status(getattr(e, "status_code", None)),
                original_exception=e,
            )

        if not isinstance(fal_result, dict):
            raise UpstreamError("Fal.ai returned an empty result", ErrorCode.NO_IMAGES)

        try:
            return GenerationResult.model_validate(fal_result)
        except pydantic.ValidationError as e:
            raise UpstreamError(
                f"Fal.ai returned a malformed result: {e.error_count()} invalid field(s)",
                ErrorCode.INTERNAL_ERROR,
                original_exception=e,
            )


def _classify_status(status_code: Optional[int]) -> ErrorCode:
    """Map an HTTP status from the FAL API to an error code."""
    if not isinstance(status_code, int):
        return ErrorCode.INTERNAL_ERROR
    if status_code == 429:
        return ErrorCode.RATE_LIMITED
    if status_code in (401, 403):
        return ErrorCode.AUTHENTICATION_FAILED
    if 400 <= status_code < 500:
        return ErrorCode.PROVIDER_REJECTED
    if status_code >= 500:
        return ErrorCode.PROVIDER_OVERLOADED
    return ErrorCode.INTERNAL_ERROR
