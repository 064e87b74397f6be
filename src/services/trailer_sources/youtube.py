"""YouTube Data API trailer source.

Fallback when Gemini is unavailable or unsure. Searches for
"<title> <year> official trailer" and accepts the first hit whose title
looks like an official trailer.

Quota: one search.list call costs 100 units (10,000 units/day free).
"""

import asyncio
import json
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from models.trailer import NOT_FOUND, Failed, Found, Outcome, Query, SourceTag
from services.trailer_sources.base import TrailerSource, run_with_timeout
from utils.config import TrailerAIConfig
from utils.errors import (
    APIKeyInvalidError,
    NetworkError,
    QuotaExceededError,
    TrailerError,
)
from utils.logging import sdk_logger
from utils.youtube_url import watch_url

YOUTUBE_CONFIDENCE = 0.7

OFFICIAL_TRAILER_MARKERS = ("official trailer", "theatrical trailer", "main trailer")

_QUOTA_REASONS = {"quotaExceeded", "rateLimitExceeded", "dailyLimitExceeded", "userRateLimitExceeded"}
_KEY_REASONS = {"keyInvalid", "keyExpired", "forbidden", "accessNotConfigured", "ipRefererBlocked"}


@dataclass(frozen=True)
class SearchHit:
    """One entry of a YouTube search result page."""

    video_id: str
    title: str
    description: str = ""


# Blocking search call: (query, max_results) -> ordered hits
SearchClient = Callable[[str, int], List[SearchHit]]


def build_search_query(query: Query) -> str:
    """Build the YouTube search string for a movie."""
    parts = [query.title]
    if query.year:
        parts.append(query.year)
    parts.append("official trailer")
    return " ".join(parts)


def is_official_trailer(title: str) -> bool:
    """Check whether a video title looks like an official trailer."""
    lower_title = title.lower()
    return any(marker in lower_title for marker in OFFICIAL_TRAILER_MARKERS)


class YouTubeTrailerSource(TrailerSource):
    """Trailer source backed by the YouTube Data API v3 search endpoint."""

    def __init__(
        self,
        config: TrailerAIConfig,
        search_client: Optional[SearchClient] = None,
    ):
        """Initialize the YouTube source.

        Args:
            config: SDK configuration (API key, timeout, page size)
            search_client: Optional blocking search callable used instead of
                the YouTube API client, mainly for tests
        """
        self.config = config
        self.search_client = search_client
        self.logger = sdk_logger(__name__, config.enable_logging)
        self._youtube = None
        self._lock = threading.RLock()  # One client shared by all worker threads

    def get_source_name(self) -> str:
        return "youtube"

    def is_configured(self) -> bool:
        return self.config.has_youtube_key

    async def resolve(self, query: Query) -> Outcome:
        if not self.is_configured():
            # Optional source: no key means skip, not fail
            self.logger.debug("[YouTube] Skipping search - no API key configured")
            return NOT_FOUND

        search_query = build_search_query(query)
        self.logger.info(f"[YouTube] Searching for: '{search_query}'")

        try:
            hits = await run_with_timeout(
                asyncio.to_thread(self._search, search_query, self.config.youtube_max_results),
                self.config.timeout_seconds,
                "YouTube API",
            )
        except Exception as e:
            error = self._to_trailer_error(e)
            self.logger.error(f"[YouTube] Search failed for '{search_query}': {error.message}")
            return Failed.from_exception(error)

        trailer = next((hit for hit in hits if is_official_trailer(hit.title)), None)
        if trailer is None:
            self.logger.info(f"[YouTube] No official trailer among {len(hits)} results")
            return NOT_FOUND

        return Found(watch_url(trailer.video_id), SourceTag.YOUTUBE_API, YOUTUBE_CONFIDENCE)

    def _search(self, search_query: str, max_results: int) -> List[SearchHit]:
        if self.search_client is not None:
            return list(self.search_client(search_query, max_results))

        request = self._get_client().search().list(
            part="snippet", q=search_query, type="video", maxResults=max_results
        )
        response = self._execute_request(request)
        return [hit for hit in map(self._parse_item, response.get("items", [])) if hit]

    def _get_client(self):
        """Build the YouTube API client on first use."""
        with self._lock:
            if self._youtube is None:
                self._youtube = build(
                    "youtube", "v3", developerKey=self.config.youtube_api_key, cache_discovery=False
                )
            return self._youtube

    def _execute_request(self, request):
        """Execute an API request with thread safety.

        The client's HTTP transport is not thread-safe, so concurrent
        lookups on one source run their requests one at a time.
        """
        with self._lock:
            return request.execute()

    @staticmethod
    def _parse_item(item: dict) -> Optional[SearchHit]:
        video_id = item.get("id", {}).get("videoId")
        if not video_id:
            return None
        snippet = item.get("snippet", {})
        return SearchHit(
            video_id=video_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
        )

    @staticmethod
    def _error_reasons(error: HttpError) -> set:
        try:
            payload = json.loads(error.content.decode("utf-8"))
        except (AttributeError, UnicodeDecodeError, ValueError):
            return set()
        errors = payload.get("error", {}).get("errors", []) if isinstance(payload, dict) else []
        return {e.get("reason") for e in errors if isinstance(e, dict)}

    def _to_trailer_error(self, error: Exception) -> TrailerError:
        """Map client exceptions onto the trailer error taxonomy."""
        if isinstance(error, TrailerError):
            return error

        if isinstance(error, HttpError):
            status = error.resp.status
            reasons = self._error_reasons(error)
            if status == 429 or reasons & _QUOTA_REASONS:
                return QuotaExceededError(f"YouTube API quota exceeded (HTTP {status})", error)
            if status in (400, 401, 403) and (status == 401 or reasons & _KEY_REASONS):
                return APIKeyInvalidError(f"YouTube API rejected the API key (HTTP {status})", error)
            return NetworkError(f"YouTube API error (HTTP {status})", error)

        return NetworkError(f"YouTube API service failed: {error}", error)
