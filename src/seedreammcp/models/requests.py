"""Request models for the SeedDream tools."""

from typing import Any, Optional, TypeVar, Union

import pydantic
from pydantic import BaseModel, Field, field_validator

from seedreammcp.models.errors import ValidationError
from seedreammcp.models.sizes import AspectRatio, ImageSize
from seedreammcp.utils.size_utils import resolve_aspect_ratio, resolve_image_size

MAX_BATCH_PROMPTS = 5

RequestT = TypeVar("RequestT", bound="ToolRequest")


class ToolRequest(BaseModel):
    """Base for tool argument payloads."""

    @classmethod
    def from_arguments(cls: type[RequestT], arguments: Optional[dict[str, Any]]) -> RequestT:
        """
        Build a request from raw tool arguments.

        Raises:
            ValidationError: If any field is missing, mistyped or out of range
        """
        try:
            return cls.model_validate(arguments or {})
        except pydantic.ValidationError as e:
            raise ValidationError(_describe(e), original_exception=e)


class ImageGenerationRequest(ToolRequest):
    """Arguments of the generate_image tool."""

    prompt: str = Field(..., min_length=1, description="Text prompt used to generate the image")
    image_size: Optional[Union[str, dict[str, Any]]] = Field(
        None, description="Preset name or {width, height} (SeedDream 4.0)"
    )
    aspect_ratio: Optional[str] = Field(None, description="Aspect ratio token (SeedDream 3.0)")
    num_images: int = Field(1, ge=1, le=6, description="Number of separate model generations (1-6)")
    max_images: int = Field(1, ge=1, le=6, description="Maximum images per generation (1-6)")
    seed: Optional[int] = Field(None, description="Random seed for reproducible results")
    sync_mode: bool = Field(False, description="Wait for upload before the API responds")
    enable_safety_checker: bool = Field(True, description="Filter inappropriate content")
    guidance_scale: float = Field(2.5, ge=1.0, le=10.0, description="Prompt adherence (SeedDream 3.0)")

    @field_validator("prompt", mode="before")
    @classmethod
    def prompt_must_be_text(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Prompt is required and must be a non-empty string")
        return value

    def resolved_size(self) -> ImageSize:
        """Resolve image_size to concrete dimensions (default square_1280)."""
        return resolve_image_size(self.image_size)

    def resolved_aspect_ratio(self) -> AspectRatio:
        """Resolve aspect_ratio to a supported token (default 1:1)."""
        return resolve_aspect_ratio(self.aspect_ratio)


class BatchGenerationRequest(ToolRequest):
    """Arguments of the generate_image_batch tool."""

    prompts: list[str] = Field(..., description="Prompts to generate one image each for (1-5)")
    image_size: Optional[Union[str, dict[str, Any]]] = Field(
        None, description="Size applied to every prompt (SeedDream 4.0)"
    )
    aspect_ratio: Optional[str] = Field(None, description="Aspect ratio applied to every prompt (SeedDream 3.0)")
    enable_safety_checker: bool = Field(True, description="Filter inappropriate content")

    @field_validator("prompts", mode="before")
    @classmethod
    def prompts_must_be_bounded(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)) or len(value) == 0:
            raise ValueError("Prompts array is required and must not be empty")
        if len(value) > MAX_BATCH_PROMPTS:
            raise ValueError(f"Maximum {MAX_BATCH_PROMPTS} prompts allowed per batch request")
        for index, prompt in enumerate(value):
            if not isinstance(prompt, str) or not prompt.strip():
                raise ValueError(f"Prompt {index + 1} must be a non-empty string")
        return list(value)

    def resolved_size(self) -> ImageSize:
        return resolve_image_size(self.image_size)

    def resolved_aspect_ratio(self) -> AspectRatio:
        return resolve_aspect_ratio(self.aspect_ratio)


def _describe(error: pydantic.ValidationError) -> str:
    """Flatten a pydantic error into 'field: reason' clauses."""
    parts = []
    for item in error.errors():
        ctx_error = item.get("ctx", {}).get("error")
        reason = str(ctx_error) if ctx_error is not None else item["msg"]
        location = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{location}: {reason}" if location else reason)
    return "; ".join(parts)
