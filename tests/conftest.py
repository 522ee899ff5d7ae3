"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from summarizer.main import app
from summarizer.schemas import ResolvedContent, SummaryResult, VideoMetadata
from summarizer.services.content_resolver import ContentResolver
from summarizer.services.history_service import HistoryStore
from summarizer.services.pipeline import SummaryPipeline, get_history_store, get_pipeline


@pytest.fixture
def test_client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def sample_metadata() -> VideoMetadata:
    return VideoMetadata(video_id="abc123", title="T")


@pytest.fixture
def metadata_client(sample_metadata: VideoMetadata) -> Mock:
    """Metadata lookup that always succeeds."""
    client = Mock()
    client.fetch = AsyncMock(return_value=sample_metadata)
    return client


@pytest.fixture
def transcript_client() -> Mock:
    """Transcript lookup that always returns 'hello world'."""
    client = Mock()
    client.fetch = AsyncMock(return_value="hello world")
    return client


@pytest.fixture
def generator() -> Mock:
    """Summary generator returning a fixed summary."""
    service = Mock()
    service.generate = AsyncMock(return_value=SummaryResult(text="A short summary."))
    return service


@pytest.fixture
def history() -> HistoryStore:
    return HistoryStore()


@pytest.fixture
def pipeline(metadata_client, transcript_client, generator, history) -> SummaryPipeline:
    resolver = ContentResolver(
        metadata_client=metadata_client,
        transcript_client=transcript_client,
        timeout=1.0,
    )
    return SummaryPipeline(resolver=resolver, generator=generator, history=history)


@pytest.fixture
def api_client(test_client: TestClient, pipeline: SummaryPipeline, history: HistoryStore) -> TestClient:
    """Test client wired to the mocked pipeline and a fresh history store."""
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_history_store] = lambda: history
    return test_client


@pytest.fixture
def text_content() -> ResolvedContent:
    return ResolvedContent(text="The quick brown fox jumps over the lazy dog.")
