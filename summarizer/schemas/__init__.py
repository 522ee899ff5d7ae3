"""Pydantic schemas for request/response validation and pipeline values."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from summarizer.core.exceptions import ContentValidationError


# ─── Content sources ─────────────────────────────────────────────────────────

class SourceKind(str, Enum):
    TEXT = "text"
    TRANSCRIPT = "transcript"
    VIDEO = "video"


class ContentRequest(BaseModel):
    """A single piece of content to summarize, tagged with where it came from."""

    source_kind: SourceKind
    payload: str

    class Config:
        frozen = True

    @field_validator("payload")
    @classmethod
    def _payload_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("payload must not be empty")
        return value

    @classmethod
    def build(cls, source_kind: SourceKind, payload: Optional[str], field: str) -> "ContentRequest":
        """Validate a raw request field and wrap it, naming ``field`` on failure."""
        if payload is None or not str(payload).strip():
            raise ContentValidationError(f"{field} is required")
        return cls(source_kind=source_kind, payload=str(payload))


class VideoMetadata(BaseModel):
    video_id: str = Field(alias="videoId")
    title: str = ""
    thumbnail: Optional[str] = None
    channel_title: Optional[str] = Field(default=None, alias="channelTitle")
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")

    class Config:
        populate_by_name = True
        frozen = True


class ResolvedContent(BaseModel):
    text: str
    metadata: Optional[VideoMetadata] = None

    class Config:
        frozen = True

    @field_validator("text")
    @classmethod
    def _text_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("resolved text must not be empty")
        return value


# ─── Generation ──────────────────────────────────────────────────────────────

class LengthMode(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @classmethod
    def parse(cls, value: Union["LengthMode", str, None]) -> "LengthMode":
        """Map a caller-supplied mode to a member; absent or unknown means medium."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


class SummaryResult(BaseModel):
    text: str


# ─── History ─────────────────────────────────────────────────────────────────

class HistoryItem(BaseModel):
    """A stored summarization record. Caller fields ride along as extras."""

    id: str
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True
        frozen = True
        extra = "allow"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ─── API bodies ──────────────────────────────────────────────────────────────
# Required fields are Optional here so a missing value produces our own 400
# ("content is required") instead of a generic 422.

class SummarizeOptions(BaseModel):
    mode: Optional[str] = None
    platform: Optional[str] = None
    save: bool = False


class TextSummaryRequest(SummarizeOptions):
    content: Optional[str] = None


class TranscriptSummaryRequest(SummarizeOptions):
    transcript: Optional[str] = None


class VideoSummaryRequest(SummarizeOptions):
    video_id: Optional[str] = Field(default=None, alias="videoId")

    class Config:
        populate_by_name = True


class HistoryListResponse(BaseModel):
    history: List[Dict[str, Any]]


class HistoryItemResponse(BaseModel):
    item: Dict[str, Any]


class DeleteResponse(BaseModel):
    success: bool
    removed: bool
