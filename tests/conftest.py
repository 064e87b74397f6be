"""Shared pytest fixtures for trailer-ai tests."""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.trailer import NOT_FOUND, Outcome, Query  # noqa: E402
from services.movie_validator import MovieValidator  # noqa: E402
from services.trailer_sources.base import TrailerSource  # noqa: E402
from utils.config import TrailerAIConfig  # noqa: E402


class FakeSource(TrailerSource):
    """Trailer source returning a fixed outcome and counting calls."""

    def __init__(self, name: str, outcome: Outcome = NOT_FOUND, error: Optional[Exception] = None):
        self.name = name
        self.outcome = outcome
        self.error = error
        self.calls: List[Query] = []

    def get_source_name(self) -> str:
        return self.name

    async def resolve(self, query: Query) -> Outcome:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.outcome


class DictValidator(MovieValidator):
    """Validator backed by a title -> Query dict."""

    def __init__(self, movies: Dict[str, Query]):
        self.movies = movies
        self.calls: List[str] = []

    async def validate(self, title: str) -> Optional[Query]:
        self.calls.append(title)
        return self.movies.get(title)


@pytest.fixture
def sample_config() -> TrailerAIConfig:
    """Configuration with short timeouts and no API keys."""
    return TrailerAIConfig(timeout_seconds=0.5)


@pytest.fixture
def gemini_config() -> TrailerAIConfig:
    """Configuration with a Gemini key (client is never called in tests)."""
    return TrailerAIConfig(gemini_api_key="test_gemini_key", timeout_seconds=0.5)


@pytest.fixture
def youtube_config() -> TrailerAIConfig:
    """Configuration with a YouTube key (client is never called in tests)."""
    return TrailerAIConfig(youtube_api_key="test_youtube_key", timeout_seconds=0.5)


@pytest.fixture
def inception() -> Query:
    return Query(title="Inception", year="2010", director="Christopher Nolan")


@pytest.fixture
def sample_validator() -> DictValidator:
    """Validator knowing a handful of movies."""
    return DictValidator(
        {
            "Inception": Query("Inception", year="2010", director="Christopher Nolan"),
            "Interstellar": Query("Interstellar", year="2014", director="Christopher Nolan"),
            "Dune": Query("Dune", year="2021", director="Denis Villeneuve"),
            "Tenet": Query("Tenet", year="2020", director="Christopher Nolan"),
            "Memento": Query("Memento", year="2000", director="Christopher Nolan"),
            "Arrival": Query("Arrival", year="2016", director="Denis Villeneuve"),
        }
    )
