"""Composition root: resolve content, generate a summary, optionally record it."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from summarizer.core.exceptions import SummarizerError
from summarizer.core.logging import logger
from summarizer.schemas import (
    ContentRequest,
    HistoryItem,
    LengthMode,
    ResolvedContent,
    SourceKind,
    SummaryResult,
)
from summarizer.services.content_resolver import ContentResolver
from summarizer.services.history_service import HistoryStore, history_store
from summarizer.services.summarization_service import SummarizationService, summarization_service


@dataclass(frozen=True)
class PipelineResult:
    source_kind: SourceKind
    content: ResolvedContent
    summary: SummaryResult
    history_item: Optional[HistoryItem] = None

    def to_response(self) -> Dict[str, Any]:
        """Shape the result the way the HTTP layer returns it."""
        if self.source_kind is SourceKind.VIDEO:
            return {
                "videoData": self.content.metadata.model_dump(mode="json", by_alias=True),
                "summary": self.summary.text,
                "transcript": self.content.text,
            }
        return {"summary": self.summary.text}


class SummaryPipeline:
    def __init__(
        self,
        resolver: Optional[ContentResolver] = None,
        generator: Optional[SummarizationService] = None,
        history: Optional[HistoryStore] = None,
    ):
        self.resolver = resolver or ContentResolver()
        self.generator = generator or summarization_service
        self.history = history if history is not None else history_store

    async def run(
        self,
        request: ContentRequest,
        mode: Union[LengthMode, str, None] = None,
        platform: Optional[str] = None,
        save: bool = False,
    ) -> PipelineResult:
        """
        Run one summarization end to end.

        Nothing is returned or saved unless both resolution and generation
        succeed. Failures are logged with the stage and source kind, then
        re-raised unchanged.
        """
        kind = request.source_kind.value
        length = LengthMode.parse(mode)

        try:
            content = await self.resolver.resolve(request)
        except SummarizerError as e:
            logger.error(f"Resolve failed [{e.kind.value}] source={kind}: {e.message}")
            raise

        try:
            summary = await self.generator.generate(content, length, platform=platform)
        except SummarizerError as e:
            logger.error(f"Generate failed [{e.kind.value}] source={kind} mode={length.value}: {e.message}")
            raise

        result = PipelineResult(source_kind=request.source_kind, content=content, summary=summary)
        logger.info(
            f"Summarized {kind} ({len(content.text)} chars, mode={length.value}) "
            f"→ {len(summary.text)} chars"
        )

        if save:
            item = self.history.save(result.to_response())
            logger.info(f"Saved history item {item.id}")
            result = replace(result, history_item=item)

        return result


# Singleton instance
summary_pipeline = SummaryPipeline()


def get_pipeline() -> SummaryPipeline:
    """FastAPI dependency returning the shared pipeline."""
    return summary_pipeline


def get_history_store() -> HistoryStore:
    """FastAPI dependency returning the shared history store."""
    return history_store
