"""Integration tests for the TrailerAI facade.

Runs the real source chain (Gemini -> YouTube -> pattern table) with the
Gemini and YouTube clients replaced by injected fakes.
"""

import asyncio
from unittest.mock import Mock

import pytest

from conftest import DictValidator
from models.trailer import NOT_FOUND, Candidate, Found, NotFound, Query, SourceTag
from services.trailer_sources.youtube import SearchHit
from trailer_ai import TrailerAI
from utils.config import TrailerAIConfig
from utils.errors import ConfigurationError

SUGGESTIONS = """Here you go:
Movie: Interstellar | Trailer: https://www.youtube.com/watch?v=2LqzF5WauAw
Movie: Tenet | Trailer: NO_TRAILER
Movie: Fake Movie That Does Not Exist | Trailer: https://youtu.be/aaaaaaaaaaa
Movie: Memento | Trailer: https://youtu.be/HDWylEQSwFo
Movie: Dune | Trailer: NO_TRAILER
Movie: Arrival | Trailer: https://youtu.be/tFMo3UJ4B4g
Movie: Inception | Trailer: https://youtu.be/YoHD9XEInc0
"""


def routing_provider(suggestions: str = SUGGESTIONS, lookup: str = "NO_TRAILER_FOUND"):
    """Fake Gemini: suggestion prompts get the list, lookups get `lookup`."""

    async def provider(prompt: str):
        if prompt.startswith("Based on these movies"):
            return suggestions
        return lookup

    return provider


class TestInitialize:
    def test_invalid_config_raises(self):
        with pytest.raises(ConfigurationError, match="timeout_seconds"):
            TrailerAI.initialize(TrailerAIConfig(timeout_seconds=-1))

    def test_builds_default_chain(self):
        trailer_ai = TrailerAI.initialize(TrailerAIConfig())

        assert [s.get_source_name() for s in trailer_ai.resolver.sources] == [
            "gemini",
            "youtube",
            "pattern",
        ]
        assert trailer_ai.suggester is trailer_ai.resolver.sources[0]


class TestFindTrailer:
    @pytest.mark.asyncio
    async def test_gemini_answer_wins(self):
        search = Mock()
        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(youtube_api_key="key", timeout_seconds=0.5),
            text_provider=routing_provider(lookup="https://youtu.be/YoHD9XEInc0"),
            search_client=search,
        )

        outcome = await trailer_ai.find_trailer(Query("Inception"))

        assert outcome.source is SourceTag.GEMINI_AI
        search.assert_not_called()

    @pytest.mark.asyncio
    async def test_youtube_used_when_gemini_has_nothing(self):
        search = Mock(return_value=[SearchHit("8hP9D6kZseM", "Inception Official Trailer")])
        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(youtube_api_key="key", timeout_seconds=0.5),
            text_provider=routing_provider(),
            search_client=search,
        )

        outcome = await trailer_ai.find_trailer(Query("Inception"))

        assert outcome == Found(
            "https://www.youtube.com/watch?v=8hP9D6kZseM", SourceTag.YOUTUBE_API, 0.7
        )

    @pytest.mark.asyncio
    async def test_everything_failing_is_not_found(self):
        async def broken(prompt):
            raise ConnectionError("offline")

        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(youtube_api_key="key", timeout_seconds=0.5),
            text_provider=broken,
            search_client=Mock(side_effect=ConnectionError("offline")),
        )

        assert await trailer_ai.find_trailer(Query("Totally Unknown Movie XYZ123")) == NOT_FOUND


class TestSuggestRelevantMovies:
    @pytest.mark.asyncio
    async def test_suggestions_are_validated_and_resolved(self, sample_validator):
        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(timeout_seconds=0.5), text_provider=routing_provider()
        )

        results = await trailer_ai.suggest_relevant_movies([Query("Inception")], sample_validator)
        by_title = {r.query.title: r for r in results}

        # Only the first five suggestions are considered; the fake one is not validated
        assert set(sample_validator.calls) == {
            "Interstellar",
            "Tenet",
            "Fake Movie That Does Not Exist",
            "Memento",
            "Dune",
        }
        assert set(by_title) == {"Interstellar", "Tenet", "Memento", "Dune"}

        # Hints from the suggestion response are used as-is
        assert by_title["Interstellar"].outcome == Found(
            "https://www.youtube.com/watch?v=2LqzF5WauAw", SourceTag.GEMINI_AI, 0.9
        )
        # No hint: Gemini says no trailer, YouTube has no key, pattern table knows Dune
        assert by_title["Dune"].outcome.source is SourceTag.PATTERN_MATCHING
        # No hint and unknown everywhere
        assert isinstance(by_title["Tenet"].outcome, NotFound)
        # Full validated record is returned
        assert by_title["Memento"].query.director == "Christopher Nolan"

    @pytest.mark.asyncio
    async def test_without_gemini_key_is_empty(self, sample_validator):
        trailer_ai = TrailerAI.initialize(TrailerAIConfig())

        assert await trailer_ai.suggest_relevant_movies([Query("Inception")], sample_validator) == []
        assert sample_validator.calls == []

    @pytest.mark.asyncio
    async def test_result_cap_across_many_validations(self):
        lines = "\n".join(f"Movie: Film {i} | Trailer: https://youtu.be/YoHD9XEInc0" for i in range(10))
        validator = DictValidator({f"Film {i}": Query(f"Film {i}") for i in range(10)})
        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(timeout_seconds=0.5, batch_intake_limit=10, batch_result_limit=5),
            text_provider=routing_provider(suggestions=lines),
        )

        results = await trailer_ai.suggest_relevant_movies([Query("Inception")], validator)

        assert len(results) == 5


class TestEnrichBatch:
    @pytest.mark.asyncio
    async def test_accepts_titles_and_candidates(self, sample_validator):
        trailer_ai = TrailerAI.initialize(TrailerAIConfig(timeout_seconds=0.5))

        results = await trailer_ai.enrich_batch(
            ["Inception", Candidate("Arrival", "https://youtu.be/tFMo3UJ4B4g")], sample_validator
        )
        by_title = {r.query.title: r.outcome for r in results}

        assert by_title["Inception"].source is SourceTag.PATTERN_MATCHING
        assert by_title["Arrival"].source is SourceTag.GEMINI_AI

    @pytest.mark.asyncio
    async def test_partial_results_under_budget(self):
        class SlowForSome(DictValidator):
            async def validate(self, title):
                if title.startswith("Slow"):
                    await asyncio.sleep(5)
                return await super().validate(title)

        validator = SlowForSome({"Inception": Query("Inception"), "Slow Movie": Query("Slow Movie")})
        trailer_ai = TrailerAI.initialize(
            TrailerAIConfig(timeout_seconds=0.1, batch_budget_multiplier=2.0)
        )

        results = await trailer_ai.enrich_batch(["Slow Movie", "Inception"], validator)

        assert [r.query.title for r in results] == ["Inception"]
