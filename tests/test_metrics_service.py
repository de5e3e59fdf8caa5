"""Tests for the in-memory metrics service."""

from seedreammcp.models.metrics import GenerationMetrics
from seedreammcp.services.metrics_service import MetricsService


def make_metrics(**overrides):
    values = {"tool_name": "generate_image", "duration_ms": 100, "success": True}
    values.update(overrides)
    return GenerationMetrics(**values)


def test_summary_empty():
    summary = MetricsService().summary()

    assert summary["calls"] == 0
    assert summary["avg_duration_ms"] == 0


def test_record_and_summary():
    service = MetricsService()
    service.record(make_metrics(duration_ms=100, images_generated=2, images_downloaded=1))
    service.record(make_metrics(duration_ms=300, success=False))

    summary = service.summary()

    assert summary["calls"] == 2
    assert summary["failed_calls"] == 1
    assert summary["total_duration_ms"] == 400
    assert summary["avg_duration_ms"] == 200
    assert summary["images_generated"] == 2
    assert summary["images_downloaded"] == 1


def test_get_all_returns_copy():
    service = MetricsService()
    service.record(make_metrics())

    service.get_all().clear()

    assert len(service.get_all()) == 1
