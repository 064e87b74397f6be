"""Batch enrichment of suggested titles into validated movies with trailers.

Each candidate gets its own task: validate the title, then either trust the
trailer hint that came with the suggestion or run a full resolution. Task
results flow back to a single consumer loop, which keeps at most
batch_result_limit of them in completion order. The whole batch runs under
an overall time budget; when it expires the results collected so far are
returned and every unfinished task is cancelled.
"""

import asyncio
from typing import Iterable, List, Optional

from models.trailer import Candidate, EnrichedResult, Found, Query, SourceTag
from services.movie_validator import MovieValidator
from services.response_parser import extract_trailer_url
from services.trailer_resolver import TrailerResolver
from services.trailer_sources.gemini import GEMINI_CONFIDENCE
from utils.config import TrailerAIConfig
from utils.logging import sdk_logger


class BatchEnrichmentService:
    """Concurrent validate-then-resolve pipeline for suggestion candidates."""

    def __init__(self, resolver: TrailerResolver, config: Optional[TrailerAIConfig] = None):
        """Initialize the enrichment service.

        Args:
            resolver: Resolver used when a candidate has no usable trailer hint
            config: SDK configuration (intake/result limits, time budget)
        """
        self.resolver = resolver
        self.config = config or resolver.config
        self.logger = sdk_logger(__name__, self.config.enable_logging)

    async def enrich(
        self,
        candidates: Iterable[Candidate],
        validator: MovieValidator,
    ) -> List[EnrichedResult]:
        """Validate candidates and pair each known movie with a trailer outcome.

        Best effort: failed candidates are dropped, and when the time budget
        runs out the partial result is returned.

        Args:
            candidates: Suggested titles with optional trailer hints
            validator: Application-supplied movie validator

        Returns:
            At most config.batch_result_limit results, in completion order
        """
        intake = list(candidates)[: self.config.batch_intake_limit]
        if not intake:
            return []

        limit = self.config.batch_result_limit
        budget = self.config.batch_budget_seconds
        tasks = [asyncio.create_task(self._enrich_one(c, validator)) for c in intake]
        results: List[EnrichedResult] = []

        try:
            for next_done in asyncio.as_completed(tasks, timeout=budget):
                result = await next_done
                if result is None:
                    continue
                results.append(result)
                if len(results) >= limit:
                    break
        except asyncio.TimeoutError:
            self.logger.warning(
                f"[TrailerAI] Batch budget of {budget:g}s expired, "
                f"returning {len(results)} of {len(intake)} candidates"
            )
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            # No task outlives the call
            await asyncio.gather(*tasks, return_exceptions=True)

        self.logger.info(f"[TrailerAI] Enriched {len(results)} of {len(intake)} candidates")
        return results

    async def _enrich_one(
        self, candidate: Candidate, validator: MovieValidator
    ) -> Optional[EnrichedResult]:
        """Validate one candidate and resolve its trailer.

        Exceptions are contained here so one bad candidate cannot fail the
        batch. Cancellation is not an Exception and propagates.
        """
        try:
            record: Optional[Query] = await validator.validate(candidate.title)
            if record is None:
                self.logger.debug(f"[TrailerAI] '{candidate.title}' was not validated, skipping")
                return None

            hint_url = extract_trailer_url(candidate.trailer_hint) if candidate.trailer_hint else None
            if hint_url:
                outcome = Found(hint_url, SourceTag.GEMINI_AI, GEMINI_CONFIDENCE)
            else:
                outcome = await self.resolver.resolve(record)

            return EnrichedResult(record, outcome)

        except Exception as e:
            self.logger.error(
                f"[TrailerAI] Error processing suggested movie '{candidate.title}': {e}"
            )
            return None
