"""Trailer resolution through an ordered fallback chain of sources.

Sources are ordered by trust (highest confidence first) and tried one after
another. The first Found wins; no later source is consulted and no outcomes
are merged or compared. Failed and NotFound outcomes are logged and the chain
moves on. When the chain is exhausted the caller gets NotFound, even if every
source failed: errors are logged and swallowed so that callers only deal with
found / not found.
"""

from typing import Optional, Sequence

from models.trailer import NOT_FOUND, Failed, Found, NotFound, Outcome, Query
from services.trailer_sources.base import TrailerSource
from services.trailer_sources.gemini import GeminiTrailerSource, TextProvider
from services.trailer_sources.pattern import PatternMatchingSource
from services.trailer_sources.youtube import SearchClient, YouTubeTrailerSource
from utils.config import TrailerAIConfig
from utils.logging import sdk_logger


class TrailerResolver:
    """Resolves a trailer by trying each source in order.

    Holds no mutable state besides its immutable source tuple and config, so
    one instance can serve concurrent lookups.
    """

    def __init__(self, sources: Sequence[TrailerSource], config: Optional[TrailerAIConfig] = None):
        """Initialize the resolver.

        Args:
            sources: Trailer sources in priority order
            config: SDK configuration (defaults to TrailerAIConfig())
        """
        self.sources = tuple(sources)
        self.config = config or TrailerAIConfig()
        self.logger = sdk_logger(__name__, self.config.enable_logging)

    @classmethod
    def default(
        cls,
        config: TrailerAIConfig,
        text_provider: Optional[TextProvider] = None,
        search_client: Optional[SearchClient] = None,
    ) -> "TrailerResolver":
        """Build the standard Gemini -> YouTube -> pattern matching chain."""
        return cls(
            [
                GeminiTrailerSource(config, text_provider=text_provider),
                YouTubeTrailerSource(config, search_client=search_client),
                PatternMatchingSource(config),
            ],
            config,
        )

    async def resolve(self, query: Query) -> Outcome:
        """Find the trailer for a movie.

        Never raises for source failures; cancellation still propagates.

        Args:
            query: Movie details

        Returns:
            The first Found outcome, or NotFound once every source was tried
        """
        year = f" ({query.year})" if query.year else ""
        self.logger.info(f"[TrailerAI] Searching trailer for '{query.title}'{year}")

        for source in self.sources:
            name = source.get_source_name()
            try:
                outcome = await source.resolve(query)
            except Exception as e:
                outcome = Failed.from_exception(e)

            match outcome:
                case Found():
                    self.logger.info(
                        f"[TrailerAI] Found trailer via {outcome.source.value}: {outcome.url}"
                    )
                    return outcome
                case Failed():
                    self.logger.warning(
                        f"[TrailerAI] Error in {name} ({outcome.error_kind.value}): {outcome.message}"
                    )
                case NotFound():
                    self.logger.info(f"[TrailerAI] No trailer found via {name}")
                case _:
                    self.logger.warning(
                        f"[TrailerAI] Ignoring unexpected outcome from {name}: {outcome!r}"
                    )

        return NOT_FOUND
