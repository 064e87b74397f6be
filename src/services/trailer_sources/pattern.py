"""Last-resort trailer source backed by a static table of known trailers."""

from typing import Dict, Optional

from models.trailer import NOT_FOUND, Failed, Found, Outcome, Query, SourceTag
from services.trailer_sources.base import TrailerSource, run_with_timeout
from utils.config import TrailerAIConfig
from utils.errors import TrailerError
from utils.logging import sdk_logger
from utils.youtube_url import watch_url

PATTERN_CONFIDENCE = 0.4

# Lowercase canonical title -> YouTube video id. Iteration order is the
# substring-match priority.
KNOWN_TRAILERS: Dict[str, str] = {
    "inception": "YoHD9XEInc0",
    "the dark knight": "EXeTwQWrcwY",
    "interstellar": "2LqzF5WauAw",
    "avatar": "5PSNL1qE6VY",
    "avengers": "eOrNdBpGMv8",
    "joker": "zAGVQLHvwOY",
    "parasite": "5xH0HfJHsaY",
    "1917": "UcmZNQ_8y3Y",
    "dune": "Way9Dexny3w",
}


class PatternMatchingSource(TrailerSource):
    """Looks titles up in a small table of known trailer ids.

    Needs no API key and no network, so the chain always ends with a
    deterministic answer.
    """

    def __init__(
        self,
        config: TrailerAIConfig,
        known_trailers: Optional[Dict[str, str]] = None,
    ):
        self.config = config
        self.known_trailers = dict(KNOWN_TRAILERS if known_trailers is None else known_trailers)
        self.logger = sdk_logger(__name__, config.enable_logging)

    def get_source_name(self) -> str:
        return "pattern"

    async def resolve(self, query: Query) -> Outcome:
        try:
            video_id = await run_with_timeout(
                self._lookup(query.title), self.config.timeout_seconds, "Pattern matching"
            )
        except TrailerError as e:
            self.logger.warning(f"[Pattern] {e.message}")
            return Failed.from_exception(e)

        if video_id is None:
            return NOT_FOUND
        return Found(watch_url(video_id), SourceTag.PATTERN_MATCHING, PATTERN_CONFIDENCE)

    async def _lookup(self, title: str) -> Optional[str]:
        return self.find_video_id(title)

    def find_video_id(self, title: str) -> Optional[str]:
        """Find a known video id for a title.

        Exact match on the normalized title first, then the first table key
        that contains the title or is contained in it.

        Args:
            title: Movie title as given by the caller

        Returns:
            Video id, or None if no table entry matches
        """
        movie_key = title.lower().strip()
        if not movie_key:
            return None

        if movie_key in self.known_trailers:
            return self.known_trailers[movie_key]

        for key, video_id in self.known_trailers.items():
            if key in movie_key or movie_key in key:
                self.logger.debug(f"[Pattern] '{title}' matched '{key}'")
                return video_id

        return None
