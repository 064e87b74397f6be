"""Main entry point for trailer-ai.

Usage:
    trailer_ai = TrailerAI.initialize(TrailerAIConfig(enable_logging=True))
    outcome = await trailer_ai.find_trailer(Query("Inception", year="2010"))
"""

from typing import List, Optional, Sequence, Union

from models.trailer import Candidate, EnrichedResult, Outcome, Query
from services.enrichment_service import BatchEnrichmentService
from services.movie_validator import MovieValidator
from services.trailer_resolver import TrailerResolver
from services.trailer_sources.gemini import GeminiTrailerSource, TextProvider
from services.trailer_sources.youtube import SearchClient
from utils.config import TrailerAIConfig, validate_config
from utils.errors import ConfigurationError


class TrailerAI:
    """Public API: single trailer lookups and batch movie suggestions."""

    def __init__(
        self,
        config: TrailerAIConfig,
        resolver: TrailerResolver,
        suggester: GeminiTrailerSource,
    ):
        self.config = config
        self.resolver = resolver
        self.suggester = suggester
        self.enrichment = BatchEnrichmentService(resolver, config)

    @classmethod
    def initialize(
        cls,
        config: Optional[TrailerAIConfig] = None,
        *,
        text_provider: Optional[TextProvider] = None,
        search_client: Optional[SearchClient] = None,
    ) -> "TrailerAI":
        """Create a ready-to-use instance with the default source chain.

        Args:
            config: SDK configuration (defaults to TrailerAIConfig.from_env())
            text_provider: Optional stand-in for the Gemini client
            search_client: Optional stand-in for the YouTube search client

        Returns:
            Configured TrailerAI

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = config or TrailerAIConfig.from_env()

        errors = validate_config(config)
        if errors:
            raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

        resolver = TrailerResolver.default(
            config, text_provider=text_provider, search_client=search_client
        )
        suggester = next(s for s in resolver.sources if isinstance(s, GeminiTrailerSource))
        return cls(config, resolver, suggester)

    async def find_trailer(self, query: Query) -> Outcome:
        """Find the trailer for a single movie."""
        return await self.resolver.resolve(query)

    async def suggest_relevant_movies(
        self,
        queries: Sequence[Query],
        validator: MovieValidator,
    ) -> List[EnrichedResult]:
        """Suggest movies similar to the given ones, with their trailers.

        Gemini proposes similar titles (with trailer hints in the same call),
        the validator confirms them against the application's data source,
        and titles without a usable hint go through the fallback chain.

        Args:
            queries: Movies to base the suggestions on
            validator: Application-supplied movie validator

        Returns:
            Validated movies paired with their trailer outcomes (may be partial)
        """
        candidates = await self.suggester.suggest_batch(queries)
        if not candidates:
            return []
        return await self.enrichment.enrich(candidates, validator)

    async def enrich_batch(
        self,
        titles: Sequence[Union[str, Candidate]],
        validator: MovieValidator,
    ) -> List[EnrichedResult]:
        """Validate titles and resolve their trailers concurrently.

        Args:
            titles: Plain titles or candidates carrying a trailer hint
            validator: Application-supplied movie validator

        Returns:
            Validated movies paired with their trailer outcomes (may be partial)
        """
        candidates = [t if isinstance(t, Candidate) else Candidate(title=t) for t in titles]
        return await self.enrichment.enrich(candidates, validator)
