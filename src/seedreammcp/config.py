"""Server configuration, read once from the environment at startup."""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from seedreammcp.models.sizes import SeedreamVersion

logger = logging.getLogger(__name__)

FAL_KEY_ENV = "FAL_KEY"
DEFAULT_DOWNLOAD_TIMEOUT = 60.0


class ServerConfig(BaseModel):
    """Immutable settings shared by every tool call."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    fal_key: Optional[str] = Field(None, description="FAL API credential")
    model_version: SeedreamVersion = Field(SeedreamVersion.V4, description="SeedDream model generation")
    output_dir: Path = Field(default_factory=lambda: Path.cwd() / "images", description="Download directory")
    download_timeout: float = Field(DEFAULT_DOWNLOAD_TIMEOUT, gt=0, description="Per-image download timeout in seconds")
    log_level: str = Field("INFO", description="Root log level")

    @property
    def has_credentials(self) -> bool:
        return bool(self.fal_key)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "ServerConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            ServerConfig; a missing FAL_KEY is allowed and reported per call
        """
        env = os.environ if environ is None else environ

        version_value = env.get("SEEDREAM_MODEL_VERSION", SeedreamVersion.V4.value).strip().lower()
        try:
            version = SeedreamVersion(version_value)
        except ValueError:
            logger.warning(f"Unknown SEEDREAM_MODEL_VERSION '{version_value}', using v4")
            version = SeedreamVersion.V4

        output_dir = env.get("SEEDREAM_OUTPUT_DIR")
        timeout = _parse_timeout(env.get("SEEDREAM_DOWNLOAD_TIMEOUT"))

        return cls(
            fal_key=env.get(FAL_KEY_ENV) or None,
            model_version=version,
            output_dir=Path(output_dir).expanduser() if output_dir else Path.cwd() / "images",
            download_timeout=timeout,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_DOWNLOAD_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        timeout = 0.0
    if not timeout > 0:
        logger.warning(f"Invalid SEEDREAM_DOWNLOAD_TIMEOUT '{value}', using {DEFAULT_DOWNLOAD_TIMEOUT:g}")
        return DEFAULT_DOWNLOAD_TIMEOUT
    return timeout
