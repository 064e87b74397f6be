"""Movie validator interface supplied by the host application."""

from abc import ABC, abstractmethod
from typing import Optional

from models.trailer import Query


class MovieValidator(ABC):
    """Verifies suggested titles against the application's own data source (e.g. OMDB)."""

    @abstractmethod
    async def validate(self, title: str) -> Optional[Query]:
        """Validate a movie title and return its full details.

        Args:
            title: Free-text movie title

        Returns:
            Query with full details, or None if the movie is not known
        """
