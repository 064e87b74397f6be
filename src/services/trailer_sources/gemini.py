"""Gemini trailer source: trailer lookup and similar-movie suggestions via Google GenAI."""

from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from google.genai import Client
from google.genai import errors as genai_errors
from google.genai import types

from models.trailer import NOT_FOUND, Candidate, Failed, Found, Outcome, Query, SourceTag
from services.response_parser import (
    NO_TRAILER_MARKER,
    NO_TRAILER_PLACEHOLDER,
    extract_trailer_url,
    parse_suggestions,
)
from services.trailer_sources.base import TrailerSource, run_with_timeout
from utils.config import TrailerAIConfig
from utils.errors import (
    APIKeyInvalidError,
    APIKeyMissingError,
    NetworkError,
    ParseError,
    QuotaExceededError,
    TrailerError,
)
from utils.logging import sdk_logger

GEMINI_CONFIDENCE = 0.9

# Async callable standing in for the Gemini client (prompt -> response text)
TextProvider = Callable[[str], Awaitable[Optional[str]]]

# Deterministic settings for single lookups, looser ones for suggestions
LOOKUP_GENERATION = {"temperature": 0.1, "top_k": 1, "top_p": 1.0}
SUGGESTION_GENERATION = {"temperature": 0.7}


def build_trailer_prompt(query: Query) -> str:
    """Build the single-lookup prompt for a movie."""
    base_info = " ".join(
        part
        for part in (
            query.title,
            f"({query.year})" if query.year else None,
            f"directed by {query.director}" if query.director else None,
            f"Summary: {query.description}" if query.description else None,
        )
        if part
    )

    return f"""You are a movie trailer expert. Find the official YouTube trailer URL for the following movie:

Movie: {base_info}

Respond with ONLY the YouTube URL in this format: https://www.youtube.com/watch?v=VIDEO_ID
If no trailer is found, respond exactly with: {NO_TRAILER_MARKER}"""


def build_suggestion_prompt(queries: Sequence[Query], count: int = 10) -> str:
    """Build the batch suggestion prompt for a list of seed movies."""
    seeds = "; ".join(
        f"{q.title} ({q.year})" if q.year else q.title for q in queries
    )

    return f"""Based on these movies: {seeds}
Suggest {count} similar highly-rated movies.
For each suggested movie, find its official YouTube trailer URL.
Respond ONLY with a list where each line is in this format:
Movie: [Movie Title] | Trailer: [YouTube URL]
If no trailer is found, use "{NO_TRAILER_PLACEHOLDER}" for the URL.
No numbering, no descriptions."""


class GeminiTrailerSource(TrailerSource):
    """Highest-priority source: asks Gemini for the official trailer URL."""

    def __init__(
        self,
        config: TrailerAIConfig,
        text_provider: Optional[TextProvider] = None,
    ):
        """Initialize the Gemini source.

        Args:
            config: SDK configuration (API key, model, timeout)
            text_provider: Optional async callable used instead of the Gemini
                client, mainly for tests
        """
        self.config = config
        self.text_provider = text_provider
        self.logger = sdk_logger(__name__, config.enable_logging)
        self._client: Optional[Client] = None

    def get_source_name(self) -> str:
        return "gemini"

    def is_configured(self) -> bool:
        return self.config.has_gemini_key or self.text_provider is not None

    @property
    def client(self) -> Client:
        """Lazily created Google GenAI client."""
        if self._client is None:
            self._client = Client(api_key=self.config.gemini_api_key)
        return self._client

    async def resolve(self, query: Query) -> Outcome:
        if not self.is_configured():
            return Failed.from_exception(APIKeyMissingError("Gemini API key not provided"))

        prompt = build_trailer_prompt(query)

        try:
            text = await run_with_timeout(
                self._generate(prompt, LOOKUP_GENERATION),
                self.config.timeout_seconds,
                "Gemini",
            )
            if not text or not text.strip():
                raise ParseError("Empty response from Gemini")
        except Exception as e:
            error = self._to_trailer_error(e)
            self.logger.error(f"[Gemini] Lookup failed ({type(e).__name__}): {error.message}")
            return Failed.from_exception(error)

        self.logger.debug(f"[Gemini] Trailer response: '{text.strip()}'")

        trailer_url = extract_trailer_url(text)
        if trailer_url is None:
            return NOT_FOUND
        return Found(trailer_url, SourceTag.GEMINI_AI, GEMINI_CONFIDENCE)

    async def suggest_batch(self, queries: Sequence[Query]) -> List[Candidate]:
        """Ask Gemini for movies similar to the given ones, with trailer hints.

        Failures and timeouts are logged and produce an empty list.

        Args:
            queries: Seed movies

        Returns:
            At most config.max_suggestions candidates in response order
        """
        if not self.is_configured() or not queries:
            return []

        prompt = build_suggestion_prompt(queries, self.config.max_suggestions)

        try:
            text = await run_with_timeout(
                self._generate(prompt, SUGGESTION_GENERATION),
                self.config.timeout_seconds,
                "Gemini suggestion",
            )
        except Exception as e:
            error = self._to_trailer_error(e)
            self.logger.error(f"[Gemini] Suggestion request failed: {error.message}")
            return []

        if not text or not text.strip():
            self.logger.warning("[Gemini] Empty suggestion response")
            return []

        self.logger.debug(f"[Gemini] Suggestion response: '{text.strip()}'")

        candidates = parse_suggestions(text, limit=self.config.max_suggestions)
        self.logger.info(f"[Gemini] Parsed {len(candidates)} suggestions")
        return candidates

    async def _generate(self, prompt: str, generation: Dict) -> Optional[str]:
        if self.text_provider is not None:
            return await self.text_provider(prompt)

        response = await self.client.aio.models.generate_content(
            model=self.config.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(**generation),
        )
        return response.text.strip() if response.text else None

    @staticmethod
    def _to_trailer_error(error: Exception) -> TrailerError:
        """Map client exceptions onto the trailer error taxonomy."""
        if isinstance(error, TrailerError):
            return error

        if isinstance(error, genai_errors.APIError):
            if error.code == 429:
                return QuotaExceededError(f"Gemini quota exceeded: {error.message}", error)
            # Gemini reports a bad key as 400 INVALID_ARGUMENT
            bad_key = error.code == 400 and "api key" in (error.message or "").lower()
            if error.code in (401, 403) or bad_key:
                return APIKeyInvalidError(f"Gemini rejected the API key: {error.message}", error)

        message = str(error) or "Unknown generative AI error"
        return NetworkError(f"Gemini service failed: {message}", error)
