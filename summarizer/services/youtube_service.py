"""YouTube upstream lookups: video metadata (Data API v3) and transcripts."""

import asyncio
import re
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

import httpx
from youtube_transcript_api import YouTubeTranscriptApi

from summarizer.core.config import settings
from summarizer.core.exceptions import MetadataUnavailable, TranscriptUnavailable
from summarizer.core.logging import logger
from summarizer.schemas import VideoMetadata

VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
_PATH_PREFIXES = ("/shorts/", "/embed/", "/live/", "/v/")


def extract_video_id(value: str) -> str:
    """Return the video id from a bare id or any common YouTube URL form."""
    value = value.strip()
    if _VIDEO_ID_RE.match(value):
        return value

    parsed = urlparse(value)
    host = (parsed.hostname or "").lower()
    if host == "youtu.be":
        return parsed.path.lstrip("/").split("/")[0] or value
    if host.endswith("youtube.com"):
        if parsed.path == "/watch":
            ids = parse_qs(parsed.query).get("v")
            if ids:
                return ids[0]
        for prefix in _PATH_PREFIXES:
            if parsed.path.startswith(prefix):
                return parsed.path[len(prefix):].split("/")[0] or value
    return value


class YouTubeMetadataClient:
    """Fetch title, thumbnail, channel and publish date for a video."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._transport = transport

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or settings.YOUTUBE_API_KEY

    async def fetch(self, video_id: str) -> VideoMetadata:
        if not self.api_key:
            raise MetadataUnavailable("YOUTUBE_API_KEY is not set. Add it to your .env file.")

        params = {"part": "snippet", "id": video_id, "key": self.api_key}
        try:
            async with httpx.AsyncClient(
                timeout=settings.UPSTREAM_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                response = await client.get(VIDEOS_URL, params=params)
        except httpx.HTTPError as e:
            raise MetadataUnavailable(f"YouTube API request failed: {e}", e) from e

        if response.status_code != 200:
            logger.error(f"YouTube API error ({response.status_code}): {response.text}")
            raise MetadataUnavailable(f"YouTube API returned {response.status_code}")

        try:
            items = response.json().get("items", [])
        except ValueError as e:
            raise MetadataUnavailable("YouTube API returned a malformed body", e) from e
        if not items:
            raise MetadataUnavailable(f"Video not found: {video_id}")

        snippet = items[0].get("snippet") or {}
        return VideoMetadata(
            video_id=video_id,
            title=snippet.get("title", ""),
            thumbnail=self._best_thumbnail(snippet.get("thumbnails") or {}),
            channel_title=snippet.get("channelTitle"),
            published_at=snippet.get("publishedAt"),
        )

    @staticmethod
    def _best_thumbnail(thumbnails: dict) -> Optional[str]:
        for size in ("high", "medium", "default"):
            url = (thumbnails.get(size) or {}).get("url")
            if url:
                return url
        return None


class YouTubeTranscriptClient:
    """Fetch a plain-text transcript through youtube-transcript-api."""

    def __init__(self, languages: Optional[List[str]] = None, api: Optional[YouTubeTranscriptApi] = None):
        self._languages = languages
        self._api = api

    @property
    def languages(self) -> List[str]:
        return self._languages or settings.TRANSCRIPT_LANGUAGES

    def _fetch_sync(self, video_id: str) -> str:
        api = self._api or YouTubeTranscriptApi()
        fetched = api.fetch(video_id, languages=self.languages)
        parts = [snippet.text.strip() for snippet in fetched]
        return " ".join(part for part in parts if part)

    async def fetch(self, video_id: str) -> str:
        try:
            # the library is synchronous; keep the event loop free
            text = await asyncio.to_thread(self._fetch_sync, video_id)
        except Exception as e:
            raise TranscriptUnavailable(f"Transcript lookup failed for {video_id}: {e}", e) from e

        if not text:
            raise TranscriptUnavailable(f"Transcript is empty for {video_id}")
        return text
