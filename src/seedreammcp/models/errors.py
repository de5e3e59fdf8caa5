"""Error codes and exception types for the SeedDream MCP server."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error category codes for tool operations."""

    # Caller / environment problems
    INVALID_INPUT = "INVALID_INPUT"
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"

    # Upstream (FAL) failures
    PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    PROVIDER_REJECTED = "PROVIDER_REJECTED"
    PROVIDER_OVERLOADED = "PROVIDER_OVERLOADED"
    NO_IMAGES = "NO_IMAGES"

    # Local persistence
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


# Codes that describe a problem on the remote side rather than with the request
UPSTREAM_ERRORS = {
    ErrorCode.PROVIDER_TIMEOUT,
    ErrorCode.RATE_LIMITED,
    ErrorCode.AUTHENTICATION_FAILED,
    ErrorCode.PROVIDER_REJECTED,
    ErrorCode.PROVIDER_OVERLOADED,
    ErrorCode.NO_IMAGES,
}


def is_upstream(code: ErrorCode) -> bool:
    """Check if an error code points at the remote generation service."""
    return code in UPSTREAM_ERRORS


class SeedreamError(Exception):
    """Base exception for all handled tool failures."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_code: ErrorCode | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.original_exception = original_exception


class ValidationError(SeedreamError):
    """Malformed or out-of-range caller input, detected before any network call."""

    default_code = ErrorCode.INVALID_INPUT


class ConfigurationError(SeedreamError):
    """A required setting (the FAL credential) is missing."""

    default_code = ErrorCode.CONFIGURATION_MISSING


class UpstreamError(SeedreamError):
    """The remote generation call failed or produced no images."""

    default_code = ErrorCode.INTERNAL_ERROR


class DownloadError(SeedreamError):
    """A single image could not be persisted locally."""

    default_code = ErrorCode.DOWNLOAD_FAILED
