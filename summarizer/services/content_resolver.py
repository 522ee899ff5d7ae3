"""Turn a ContentRequest into canonical text plus optional video metadata."""

import asyncio
from typing import Awaitable, Optional, Type, TypeVar

from summarizer.core.config import settings
from summarizer.core.exceptions import MetadataUnavailable, TranscriptUnavailable, UpstreamError
from summarizer.schemas import ContentRequest, ResolvedContent, SourceKind
from summarizer.services.youtube_service import (
    YouTubeMetadataClient,
    YouTubeTranscriptClient,
    extract_video_id,
)

T = TypeVar("T")


async def _bounded(call: Awaitable[T], timeout: float, error: Type[UpstreamError], what: str) -> T:
    """Await an upstream call, turning a timeout into ``error``."""
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise error(f"{what} timed out after {timeout:g}s", e) from e
    except UpstreamError:
        raise
    except Exception as e:
        raise error(f"{what} failed: {e}", e) from e


class ContentResolver:
    """Resolve text, transcript and video requests into ResolvedContent.

    Video requests need both lookups to succeed. The metadata lookup runs
    first; if it fails the transcript is never requested.
    """

    def __init__(
        self,
        metadata_client: Optional[YouTubeMetadataClient] = None,
        transcript_client: Optional[YouTubeTranscriptClient] = None,
        timeout: Optional[float] = None,
    ):
        self.metadata_client = metadata_client or YouTubeMetadataClient()
        self.transcript_client = transcript_client or YouTubeTranscriptClient()
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else settings.UPSTREAM_TIMEOUT_SECONDS

    async def resolve(self, request: ContentRequest) -> ResolvedContent:
        if request.source_kind in (SourceKind.TEXT, SourceKind.TRANSCRIPT):
            return ResolvedContent(text=request.payload)

        video_id = extract_video_id(request.payload)
        metadata = await _bounded(
            self.metadata_client.fetch(video_id), self.timeout, MetadataUnavailable, "Metadata lookup"
        )
        transcript = await _bounded(
            self.transcript_client.fetch(video_id), self.timeout, TranscriptUnavailable, "Transcript lookup"
        )
        if not transcript or not transcript.strip():
            raise TranscriptUnavailable(f"Transcript is empty for {video_id}")
        return ResolvedContent(text=transcript, metadata=metadata)
