"""Metrics service for tracking tool calls over the life of the server process."""

import logging
from typing import Any

from seedreammcp.models.metrics import GenerationMetrics

logger = logging.getLogger(__name__)


class MetricsService:
    """In-memory aggregation of GenerationMetrics, surfaced through the log."""

    def __init__(self):
        self._metrics: list[GenerationMetrics] = []

    def record(self, metrics: GenerationMetrics) -> None:
        """
        Record the metrics of one tool call.

        Args:
            metrics: The metrics to record
        """
        self._metrics.append(metrics)
        logger.debug(
            f"📊 [MetricsService] {metrics.tool_name}: success={metrics.success} "
            f"duration={metrics.duration_ms}ms prompts={metrics.prompt_count} "
            f"images={metrics.images_downloaded}/{metrics.images_generated}"
        )

    def get_all(self) -> list[GenerationMetrics]:
        """Get all recorded metrics."""
        return self._metrics.copy()

    def summary(self) -> dict[str, Any]:
        """Aggregate call counts, durations and image totals."""
        if not self._metrics:
            return {
                "calls": 0,
                "failed_calls": 0,
                "total_duration_ms": 0,
                "avg_duration_ms": 0,
                "images_generated": 0,
                "images_downloaded": 0,
            }

        total_duration = sum(m.duration_ms for m in self._metrics)
        return {
            "calls": len(self._metrics),
            "failed_calls": sum(1 for m in self._metrics if not m.success),
            "total_duration_ms": total_duration,
            "avg_duration_ms": total_duration / len(self._metrics),
            "images_generated": sum(m.images_generated for m in self._metrics),
            "images_downloaded": sum(m.images_downloaded for m in self._metrics),
        }
