"""Text reports returned by the SeedDream tools."""

from typing import Optional

from seedreammcp.models.requests import ImageGenerationRequest
from seedreammcp.models.responses import BatchOutcome, DownloadedImage, GenerationResult
from seedreammcp.models.sizes import AspectRatio, ImageSize, SeedreamVersion

CONFIGURATION_HELP = (
    "Error: FAL_KEY environment variable is not set. Please configure your FAL API key "
    "(export FAL_KEY=your_fal_key_here) and restart the server."
)


def _flag(enabled: bool) -> str:
    return "Enabled" if enabled else "Disabled"


def _seed(seed: Optional[int]) -> str:
    return str(seed) if seed is not None else "unknown"


def _shape_lines(
    version: SeedreamVersion,
    size: Optional[ImageSize],
    aspect_ratio: Optional[AspectRatio],
    guidance_scale: Optional[float] = None,
) -> list[str]:
    if version == SeedreamVersion.V3:
        lines = [f"Aspect Ratio: {(aspect_ratio or AspectRatio.SQUARE).value}"]
        if guidance_scale is not None:
            lines.append(f"Guidance Scale: {guidance_scale}")
        return lines
    return [f"Image Size: {size.label if size else 'unknown'}"]


def format_single_report(
    version: SeedreamVersion,
    request: ImageGenerationRequest,
    result: GenerationResult,
    downloads: list[DownloadedImage],
    size: Optional[ImageSize] = None,
    aspect_ratio: Optional[AspectRatio] = None,
) -> str:
    """Report for generate_image: parameters, seed used and every image."""
    lines = [
        f"Successfully generated {len(result.images)} image(s) using {version.display_name}:",
        "",
        f'Prompt: "{request.prompt}"',
        *_shape_lines(version, size, aspect_ratio, request.guidance_scale),
        f"Number of Images: {request.num_images}",
    ]
    if version == SeedreamVersion.V4:
        lines.append(f"Max Images per Generation: {request.max_images}")
    lines += [
        f"Safety Checker: {_flag(request.enable_safety_checker)}",
        f"Seed Used: {_seed(result.seed)}",
        "",
        "Generated Images:",
    ]

    blocks = []
    for index, image in enumerate(downloads, start=1):
        location = str(image.local_path) if image.downloaded else f"Failed to download: {image.error}"
        blocks.append(
            f"Image {index} ({image.dimensions_label}):\n"
            f"  Local Path: {location}\n"
            f"  Original URL: {image.source_url}"
        )

    text = "\n".join(lines) + "\n" + "\n\n".join(blocks)
    if any(image.downloaded for image in downloads):
        text += (
            "\n\nImages have been downloaded to the local output directory. "
            "You can find them at the local paths listed above."
        )
    return text


def format_batch_report(
    version: SeedreamVersion,
    outcome: BatchOutcome,
    enable_safety_checker: bool,
    size: Optional[ImageSize] = None,
    aspect_ratio: Optional[AspectRatio] = None,
) -> str:
    """Report for generate_image_batch: settings header, successes, failures."""
    lines = [
        f"Batch image generation completed using {version.display_name}:",
        "",
        "Settings:",
        *(f"- {line}" for line in _shape_lines(version, size, aspect_ratio)),
        f"- Safety Checker: {_flag(enable_safety_checker)}",
        f"- Total Prompts: {outcome.total}",
        f"- Successful: {len(outcome.successful)}",
        f"- Failed: {len(outcome.failed)}",
    ]

    if outcome.successful:
        lines += ["", "Successfully Generated Images:"]
        for number, item in enumerate(outcome.successful, start=1):
            lines += ["", f'{number}. Prompt: "{item.prompt}"', f"   Seed: {_seed(item.result.seed)}"]
            for index, image in enumerate(item.downloads, start=1):
                lines.append(f"   Image {index}:")
                if image.downloaded:
                    lines.append(f"     Local Path: {image.local_path}")
                else:
                    lines.append(f"     Download Failed: {image.error}")
                lines.append(f"     Original URL: {image.source_url}")

    if outcome.failed:
        lines += ["", "Failed Generations:"]
        for number, failure in enumerate(outcome.failed, start=1):
            lines += ["", f'{number}. Prompt: "{failure.prompt}"', f"   Error: {failure.error}"]

    return "\n".join(lines)


def format_error(prefix: str, message: str) -> str:
    return f"{prefix}: {message or 'Unknown error occurred'}"
