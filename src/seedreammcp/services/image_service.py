"""Image generation service backing the generate_image and generate_image_batch tools."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from seedreammcp.config import ServerConfig
from seedreammcp.models.errors import ConfigurationError, ErrorCode, SeedreamError, UpstreamError
from seedreammcp.models.metrics import GenerationMetrics
from seedreammcp.models.requests import BatchGenerationRequest, ImageGenerationRequest
from seedreammcp.models.responses import (
    BatchFailure,
    BatchOutcome,
    BatchSuccess,
    GenerationResult,
    ToolResponse,
)
from seedreammcp.models.sizes import SeedreamVersion
from seedreammcp.providers.base import ImageProvider
from seedreammcp.providers.fal_provider import FalSeedreamProvider, build_arguments
from seedreammcp.services.download_service import DownloadService
from seedreammcp.services.metrics_service import MetricsService
from seedreammcp.utils.report_utils import (
    CONFIGURATION_HELP,
    format_batch_report,
    format_error,
    format_single_report,
)

logger = logging.getLogger(__name__)

SINGLE_ERROR_PREFIX = "Error generating image"
BATCH_ERROR_PREFIX = "Error in batch generation"


class ImageService:
    """Validates tool arguments, calls SeedDream, downloads and reports."""

    def __init__(
        self,
        config: ServerConfig,
        provider: Optional[ImageProvider] = None,
        download_service: Optional[DownloadService] = None,
        metrics_service: Optional[MetricsService] = None,
    ):
        """
        Initialize image service.

        Args:
            config: Server configuration (credential, model version, output dir)
            provider: Image provider (built from config when omitted)
            download_service: Download service (built from config when omitted)
            metrics_service: Optional MetricsService for recording call metrics
        """
        self.config = config
        self.version: SeedreamVersion = config.model_version

        if provider is None:
            try:
                provider = FalSeedreamProvider(api_key=config.fal_key, version=config.model_version)
            except ValueError:
                # No credential: every call reports a configuration error instead
                provider = None
        self.provider = provider

        self.download_service = download_service or DownloadService(
            output_dir=config.output_dir,
            timeout=config.download_timeout,
        )
        self._metrics_service = metrics_service

    def _require_provider(self) -> ImageProvider:
        if self.provider is None:
            raise ConfigurationError(CONFIGURATION_HELP)
        return self.provider

    async def _invoke(self, prompt: str, options: dict[str, Any], with_logs: bool) -> GenerationResult:
        """Single upstream attempt; an empty image list counts as failure."""
        provider = self._require_provider()
        try:
            result = await provider.generate(prompt, options, with_logs=with_logs)
        except SeedreamError:
            raise
        except Exception as e:
            raise UpstreamError(str(e) or e.__class__.__name__, original_exception=e)

        if not result.images:
            raise UpstreamError("No images were generated", ErrorCode.NO_IMAGES)
        return result

    async def generate_image(self, arguments: Optional[dict[str, Any]]) -> ToolResponse:
        """
        Handle one generate_image call.

        Validate -> resolve size -> invoke once -> download all -> report.
        Every failure becomes a ToolResponse with is_error set.

        Args:
            arguments: Raw tool arguments

        Returns:
            ToolResponse with the report text
        """
        start_time = time.time()
        metrics = {"prompt_count": 1}

        try:
            if self.provider is None:
                logger.error("Cannot generate image: FAL_KEY is not configured")
                self._record("generate_image", start_time, success=False, failed_prompts=1, **metrics)
                return ToolResponse.failure(CONFIGURATION_HELP)

            request = ImageGenerationRequest.from_arguments(arguments)
            size = request.resolved_size() if self.version == SeedreamVersion.V4 else None
            aspect_ratio = request.resolved_aspect_ratio() if self.version == SeedreamVersion.V3 else None

            options = build_arguments(
                self.version,
                size=size,
                aspect_ratio=aspect_ratio,
                num_images=request.num_images,
                max_images=request.max_images,
                seed=request.seed,
                sync_mode=request.sync_mode,
                enable_safety_checker=request.enable_safety_checker,
                guidance_scale=request.guidance_scale,
            )

            logger.info(f'Generating image with {self.version.display_name}: "{request.prompt}"')
            result = await self._invoke(request.prompt, options, with_logs=True)
            metrics["images_generated"] = len(result.images)

            logger.info("Downloading images locally...")
            downloads = await self.download_service.download_all(
                result.images, request.prompt, result.seed, fallback_size=size
            )
            metrics["images_downloaded"] = sum(1 for image in downloads if image.downloaded)

            text = format_single_report(
                self.version, request, result, downloads, size=size, aspect_ratio=aspect_ratio
            )
            self._record("generate_image", start_time, success=True, **metrics)
            return ToolResponse(text=text)

        except SeedreamError as e:
            logger.error(f"Error generating image [{e.error_code.value}]: {e.message}")
            self._record("generate_image", start_time, success=False, failed_prompts=1, **metrics)
            return ToolResponse.failure(format_error(SINGLE_ERROR_PREFIX, e.message))
        except Exception as e:
            logger.exception("Unexpected error generating image")
            self._record("generate_image", start_time, success=False, failed_prompts=1, **metrics)
            return ToolResponse.failure(format_error(SINGLE_ERROR_PREFIX, str(e)))

    async def _generate_for_prompt(self, prompt: str, options: dict[str, Any]) -> BatchSuccess | BatchFailure:
        """Settle one batch prompt into a success or a failure; never raises."""
        try:
            result = await self._invoke(prompt, options, with_logs=False)
        except SeedreamError as e:
            logger.warning(f'Batch prompt failed [{e.error_code.value}]: "{prompt}": {e.message}')
            return BatchFailure(prompt=prompt, error=e.message)
        except Exception as e:
            logger.warning(f'Batch prompt failed: "{prompt}": {e}')
            return BatchFailure(prompt=prompt, error=str(e) or "Unknown error")
        return BatchSuccess(prompt=prompt, result=result)

    async def generate_image_batch(self, arguments: Optional[dict[str, Any]]) -> ToolResponse:
        """
        Handle one generate_image_batch call.

        All prompts are generated concurrently and each settles on its own;
        downloads then run per successful prompt, in prompt order.

        Args:
            arguments: Raw tool arguments

        Returns:
            ToolResponse with the aggregate report
        """
        start_time = time.time()
        metrics = {"prompt_count": 0}

        try:
            if self.provider is None:
                logger.error("Cannot generate batch: FAL_KEY is not configured")
                self._record("generate_image_batch", start_time, success=False, **metrics)
                return ToolResponse.failure(CONFIGURATION_HELP)

            request = BatchGenerationRequest.from_arguments(arguments)
            size = request.resolved_size() if self.version == SeedreamVersion.V4 else None
            aspect_ratio = request.resolved_aspect_ratio() if self.version == SeedreamVersion.V3 else None
            metrics["prompt_count"] = len(request.prompts)

            options = build_arguments(
                self.version,
                size=size,
                aspect_ratio=aspect_ratio,
                num_images=1,
                max_images=1,
                enable_safety_checker=request.enable_safety_checker,
            )

            logger.info(f"Generating batch of {len(request.prompts)} images with {self.version.display_name}")
            settled = await asyncio.gather(
                *(self._generate_for_prompt(prompt, options) for prompt in request.prompts)
            )

            outcome = BatchOutcome(
                successful=[item for item in settled if isinstance(item, BatchSuccess)],
                failed=[item for item in settled if isinstance(item, BatchFailure)],
            )

            for item in outcome.successful:
                item.downloads = await self.download_service.download_all(
                    item.result.images, item.prompt, item.result.seed, fallback_size=size
                )

            metrics["failed_prompts"] = len(outcome.failed)
            metrics["images_generated"] = sum(len(item.result.images) for item in outcome.successful)
            metrics["images_downloaded"] = sum(
                1 for item in outcome.successful for image in item.downloads if image.downloaded
            )

            text = format_batch_report(
                self.version,
                outcome,
                request.enable_safety_checker,
                size=size,
                aspect_ratio=aspect_ratio,
            )
            self._record("generate_image_batch", start_time, success=True, **metrics)
            return ToolResponse(text=text)

        except SeedreamError as e:
            logger.error(f"Error in batch generation [{e.error_code.value}]: {e.message}")
            self._record("generate_image_batch", start_time, success=False, **metrics)
            return ToolResponse.failure(format_error(BATCH_ERROR_PREFIX, e.message))
        except Exception as e:
            logger.exception("Unexpected error in batch generation")
            self._record("generate_image_batch", start_time, success=False, **metrics)
            return ToolResponse.failure(format_error(BATCH_ERROR_PREFIX, str(e)))

    def _record(self, tool_name: str, start_time: float, success: bool, **counts: int) -> None:
        if self._metrics_service is None:
            return
        self._metrics_service.record(
            GenerationMetrics(
                tool_name=tool_name,
                duration_ms=int((time.time() - start_time) * 1000),
                model_used=self.version.endpoint,
                success=success,
                timestamp=datetime.now(timezone.utc),
                **counts,
            )
        )
