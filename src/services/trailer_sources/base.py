"""Base abstraction for trailer sources."""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, TypeVar

from models.trailer import Outcome, Query
from utils.errors import TrailerTimeoutError

T = TypeVar("T")


class TrailerSource(ABC):
    """Abstract base class for trailer sources (Gemini, YouTube, pattern table, etc.)."""

    @abstractmethod
    async def resolve(self, query: Query) -> Outcome:
        """Look up the trailer for a movie.

        Implementations convert their own failures into Failed outcomes
        instead of raising.

        Args:
            query: Movie details to look up

        Returns:
            Found, Failed or NotFound
        """

    @abstractmethod
    def get_source_name(self) -> str:
        """Get the name of this trailer source.

        Returns:
            Source name (e.g., "gemini", "youtube", "pattern")
        """

    def is_configured(self) -> bool:
        """Check if this source has required configuration (API keys, etc.).

        Default implementation returns True (no config required).
        Override in subclasses that require API keys.

        Returns:
            True if source is properly configured and ready to use
        """
        return True


async def run_with_timeout(call: Awaitable[T], timeout: float, source_name: str) -> T:
    """Await a collaborator call under a per-call deadline.

    On expiry the in-flight call is cancelled and a typed
    TrailerTimeoutError is raised instead of the raw cancellation.
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise TrailerTimeoutError(
            f"{source_name} request timed out after {timeout:g}s", e
        ) from e
