"""Trailer sources package: the pluggable lookup strategies of the fallback chain."""

from services.trailer_sources.base import TrailerSource
from services.trailer_sources.gemini import GeminiTrailerSource
from services.trailer_sources.pattern import PatternMatchingSource
from services.trailer_sources.youtube import YouTubeTrailerSource

__all__ = ["TrailerSource", "GeminiTrailerSource", "YouTubeTrailerSource", "PatternMatchingSource"]
