"""Typed failures for the summarization pipeline.

Every error carries an ``ErrorKind`` tag so the API layer can report which
stage failed without inspecting exception classes.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    METADATA_UNAVAILABLE = "metadata_unavailable"
    TRANSCRIPT_UNAVAILABLE = "transcript_unavailable"
    GENERATION_FAILED = "generation_failed"
    INTERNAL = "internal"


class SummarizerError(Exception):
    """Base exception for application errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ContentValidationError(SummarizerError):
    """Raised when a required request field is absent or blank."""

    kind = ErrorKind.VALIDATION


class UpstreamError(SummarizerError):
    """Raised when an external service call fails or times out."""

    upstream: str = "upstream"


class MetadataUnavailable(UpstreamError):
    kind = ErrorKind.METADATA_UNAVAILABLE
    upstream = "metadata"


class TranscriptUnavailable(UpstreamError):
    kind = ErrorKind.TRANSCRIPT_UNAVAILABLE
    upstream = "transcript"


class GenerationFailed(UpstreamError):
    kind = ErrorKind.GENERATION_FAILED
    upstream = "generation"
