"""Base provider interface for image generation."""

from typing import Any, Protocol

from typing_extensions import runtime_checkable

from seedreammcp.models.responses import GenerationResult


@runtime_checkable
class ImageProvider(Protocol):
    """Protocol for image generation providers."""

    @property
    def endpoint(self) -> str:
        """Identifier of the remote model being called."""
        ...

    async def generate(
        self,
        prompt: str,
        options: dict[str, Any],
        with_logs: bool = False,
    ) -> GenerationResult:
        """
        Generate images for one prompt.

        Args:
            prompt: Text prompt for image generation
            options: Model-specific input fields (size, flags, seed)
            with_logs: Stream remote progress logs while the call is in flight

        Returns:
            Normalized GenerationResult

        Raises:
            UpstreamError: Any failure reported by the remote call
        """
        ...
