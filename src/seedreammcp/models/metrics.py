"""Metrics models for tool calls."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerationMetrics(BaseModel):
    """Tracking data for a single tool call."""

    tool_name: str = Field(..., description="generate_image or generate_image_batch")
    duration_ms: int = Field(..., ge=0, description="Total call time in milliseconds")
    model_used: Optional[str] = Field(None, description="FAL endpoint that served the call")
    success: bool = Field(..., description="Whether the call returned a non-error result")
    prompt_count: int = Field(1, ge=0, description="Prompts submitted in this call")
    failed_prompts: int = Field(0, ge=0, description="Prompts whose generation failed")
    images_generated: int = Field(0, ge=0, description="Images reported by the model")
    images_downloaded: int = Field(0, ge=0, description="Images saved to the output directory")
    timestamp: Optional[datetime] = Field(None, description="When the call completed (UTC)")
