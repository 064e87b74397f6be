"""Trailer lookup data models.

Query is the immutable lookup request. Every lookup attempt produces an
Outcome, which is exactly one of Found, Failed or NotFound:

    match outcome:
        case Found(url=url):
            ...
        case Failed(error_kind=kind):
            ...
        case NotFound():
            ...
        case _:
            assert_never(outcome)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from utils.errors import ErrorKind, TrailerError
from utils.youtube_url import is_video_url


class SourceTag(str, Enum):
    """Which source produced a Found outcome."""

    GEMINI_AI = "gemini_ai"
    YOUTUBE_API = "youtube_api"
    PATTERN_MATCHING = "pattern_matching"
    USER_ASSISTED = "user_assisted"


@dataclass(frozen=True)
class Query:
    """Movie details used to look up a trailer.

    The title is trimmed on construction and must not be blank.
    """

    title: str
    year: Optional[str] = None
    director: Optional[str] = None
    genre: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        title = (self.title or "").strip()
        if not title:
            raise ValueError("Movie title cannot be blank")
        object.__setattr__(self, "title", title)


@dataclass(frozen=True)
class Found:
    """A trailer URL resolved by one of the sources."""

    url: str
    source: SourceTag
    confidence: float

    def __post_init__(self):
        if not self.url or not self.url.strip():
            raise ValueError("Trailer URL cannot be blank")
        if not is_video_url(self.url):
            raise ValueError(f"Not a recognizable video URL: {self.url}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0.0, 1.0], got {self.confidence}")


@dataclass(frozen=True)
class Failed:
    """A lookup attempt that failed with a typed error."""

    error_kind: ErrorKind
    message: str
    cause: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def from_exception(cls, error: Exception) -> "Failed":
        """Convert an exception raised inside a source into a Failed outcome.

        TrailerError subclasses keep their kind; anything else is a network
        failure with the exception attached as cause.
        """
        if isinstance(error, TrailerError):
            return cls(error.kind, error.message, error.cause)
        return cls(ErrorKind.NETWORK, str(error) or type(error).__name__, error)


@dataclass(frozen=True)
class NotFound:
    """No trailer was found."""


NOT_FOUND = NotFound()

Outcome = Union[Found, Failed, NotFound]


@dataclass(frozen=True)
class Candidate:
    """A suggested title awaiting validation in batch mode."""

    title: str
    trailer_hint: Optional[str] = None


@dataclass(frozen=True)
class EnrichedResult:
    """A validated movie record paired with its trailer outcome."""

    query: Query
    outcome: Outcome
