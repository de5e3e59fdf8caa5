"""Resolution of caller-supplied size and aspect ratio specifications."""

from collections.abc import Mapping
from typing import Any, Optional

from seedreammcp.models.errors import ValidationError
from seedreammcp.models.sizes import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_PRESET,
    MAX_DIMENSION,
    MIN_DIMENSION,
    PRESET_DIMENSIONS,
    AspectRatio,
    ImageSize,
    ImageSizePreset,
)


def resolve_image_size(size_spec: Any = None) -> ImageSize:
    """
    Map a preset name or explicit dimensions to an ImageSize.

    Args:
        size_spec: None (default preset), a preset name, an ImageSize, or a
            mapping with ``width`` and ``height``

    Returns:
        Resolved ImageSize

    Raises:
        ValidationError: Unknown preset or dimensions outside 1024-4096
    """
    if size_spec is None:
        width, height = PRESET_DIMENSIONS[DEFAULT_PRESET]
        return ImageSize(width=width, height=height)

    if isinstance(size_spec, ImageSize):
        return size_spec

    if isinstance(size_spec, str):
        try:
            preset = ImageSizePreset(size_spec)
        except ValueError:
            valid = ", ".join(p.value for p in ImageSizePreset)
            raise ValidationError(f"Invalid image size preset: {size_spec}. Valid presets: {valid}")
        width, height = PRESET_DIMENSIONS[preset]
        return ImageSize(width=width, height=height)

    if isinstance(size_spec, Mapping):
        width = _as_int(size_spec.get("width"))
        height = _as_int(size_spec.get("height"))
        if width is None or height is None:
            raise ValidationError("Custom image size requires integer width and height")
        if not (MIN_DIMENSION <= width <= MAX_DIMENSION and MIN_DIMENSION <= height <= MAX_DIMENSION):
            raise ValidationError(
                f"Image dimensions must be between {MIN_DIMENSION} and {MAX_DIMENSION} pixels"
            )
        return ImageSize(width=width, height=height)

    raise ValidationError(
        "image_size must be a preset name or an object with width and height"
    )


def resolve_aspect_ratio(ratio_token: Any = None) -> AspectRatio:
    """Validate an aspect ratio token against the supported set."""
    if ratio_token is None:
        return DEFAULT_ASPECT_RATIO
    if isinstance(ratio_token, AspectRatio):
        return ratio_token
    try:
        return AspectRatio(ratio_token)
    except ValueError:
        valid = ", ".join(r.value for r in AspectRatio)
        raise ValidationError(f"Invalid aspect ratio: {ratio_token}. Valid aspect ratios: {valid}")


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass, but True x False is not a size
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
