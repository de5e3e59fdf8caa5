"""Result models for generation, downloads and tool responses."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class GeneratedImage(BaseModel):
    """One image reported by the remote model."""

    url: str = Field(..., min_length=1, description="Remote URL of the generated image")
    width: Optional[int] = Field(None, ge=1, description="Image width in pixels, if reported")
    height: Optional[int] = Field(None, ge=1, description="Image height in pixels, if reported")


class GenerationResult(BaseModel):
    """Normalized outcome of a single upstream generation call."""

    images: list[GeneratedImage] = Field(default_factory=list, description="Images in model order")
    seed: Optional[int] = Field(None, description="Seed actually used by the model")


class DownloadedImage(BaseModel):
    """Local persistence outcome for one generated image."""

    source_url: str = Field(..., description="Original remote URL")
    local_path: Optional[Path] = Field(None, description="Where the image was saved")
    error: Optional[str] = Field(None, description="Why the download failed")
    width: Optional[int] = Field(None, description="Reported or requested width")
    height: Optional[int] = Field(None, description="Reported or requested height")

    @model_validator(mode="after")
    def validate_outcome(self):
        """Exactly one of local_path / error must be set."""
        if (self.local_path is None) == (self.error is None):
            raise ValueError("exactly one of local_path or error must be set")
        return self

    @property
    def downloaded(self) -> bool:
        return self.local_path is not None

    @property
    def dimensions_label(self) -> str:
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return "unknown size"


class BatchSuccess(BaseModel):
    """A batch prompt whose generation succeeded."""

    prompt: str
    result: GenerationResult
    downloads: list[DownloadedImage] = Field(default_factory=list)


class BatchFailure(BaseModel):
    """A batch prompt whose generation failed."""

    prompt: str
    error: str


class BatchOutcome(BaseModel):
    """Batch results regrouped by outcome, each group in prompt order."""

    successful: list[BatchSuccess] = Field(default_factory=list)
    failed: list[BatchFailure] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successful) + len(self.failed)


class ToolResponse(BaseModel):
    """Uniform tool result: one text report plus an error flag."""

    text: str = Field(..., min_length=1, description="Human-readable report")
    is_error: bool = Field(False, description="Whether the operation failed")

    @classmethod
    def failure(cls, text: str) -> "ToolResponse":
        return cls(text=text, is_error=True)
