"""Summarization endpoints for raw text, raw transcripts and YouTube videos."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from summarizer.core.exceptions import ContentValidationError, UpstreamError
from summarizer.core.logging import logger
from summarizer.schemas import (
    ContentRequest,
    SourceKind,
    SummarizeOptions,
    TextSummaryRequest,
    TranscriptSummaryRequest,
    VideoSummaryRequest,
)
from summarizer.services.pipeline import SummaryPipeline, get_pipeline

router = APIRouter()


async def _summarize(
    pipeline: SummaryPipeline,
    source_kind: SourceKind,
    payload: Optional[str],
    field: str,
    options: SummarizeOptions,
) -> Dict[str, Any]:
    """Validate, run the pipeline and map typed failures to HTTP errors."""
    try:
        request = ContentRequest.build(source_kind, payload, field)
    except ContentValidationError as e:
        logger.warning(f"Validation failed [{e.kind.value}] source={source_kind.value}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    try:
        result = await pipeline.run(
            request, mode=options.mode, platform=options.platform, save=options.save
        )
    except UpstreamError as e:
        raise HTTPException(
            status_code=502,
            detail=f"Failed to summarize {source_kind.value}: {e.upstream} unavailable",
        )

    response = result.to_response()
    if result.history_item is not None:
        response["item"] = result.history_item.to_dict()
    return response


@router.post("/text")
async def summarize_text(
    body: TextSummaryRequest,
    pipeline: SummaryPipeline = Depends(get_pipeline),
):
    """
    Summarize a block of raw text.

    - `mode`: `short`, `medium` (default) or `long`
    - `save`: also record the result in history
    """
    return await _summarize(pipeline, SourceKind.TEXT, body.content, "content", body)


@router.post("/transcript")
async def summarize_transcript(
    body: TranscriptSummaryRequest,
    pipeline: SummaryPipeline = Depends(get_pipeline),
):
    """Summarize a transcript the caller already has."""
    return await _summarize(pipeline, SourceKind.TRANSCRIPT, body.transcript, "transcript", body)


@router.post("/video")
async def summarize_video(
    body: VideoSummaryRequest,
    pipeline: SummaryPipeline = Depends(get_pipeline),
):
    """
    Summarize a YouTube video by id (or URL).

    Looks up the video's metadata, then its transcript; both must succeed.
    Returns `videoData`, `summary` and the `transcript` that was summarized.
    """
    return await _summarize(pipeline, SourceKind.VIDEO, body.video_id, "videoId", body)


# Legacy path: POST /summarize with {videoId}
@router.post("")
async def summarize_video_legacy(
    body: VideoSummaryRequest,
    pipeline: SummaryPipeline = Depends(get_pipeline),
):
    """Same as `POST /summarize/video`."""
    return await _summarize(pipeline, SourceKind.VIDEO, body.video_id, "videoId", body)
