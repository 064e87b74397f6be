"""Parsing of free-text Gemini responses into trailer URLs and suggestions.

Pure functions, no I/O.
"""

import re
from typing import List, Optional

from models.trailer import Candidate
from utils.youtube_url import extract_video_id, watch_url

# Explicit "no trailer" answer for single lookups
NO_TRAILER_MARKER = "NO_TRAILER_FOUND"

# Placeholder used in suggestion lines when a movie has no known trailer
NO_TRAILER_PLACEHOLDER = "NO_TRAILER"

SUGGESTION_DELIMITER = "|"

# List markers models put in front of lines: "-", "*", "•", "1.", "2)"
_BULLET_RE = re.compile(r"^\s*(?:[-*•]+|\d+[.)])\s+")
_MOVIE_LABEL_RE = re.compile(r"movie\s*:", re.IGNORECASE)
_TRAILER_LABEL_RE = re.compile(r"trailer\s*:", re.IGNORECASE)


def extract_trailer_url(text: str) -> Optional[str]:
    """Extract the first YouTube URL from a response and normalize it.

    The negative marker is checked before any URL extraction, so chatty text
    that contains both the marker and a URL still yields no match.

    Args:
        text: Raw response text

    Returns:
        Canonical watch URL, or None if no trailer is present
    """
    if not text:
        return None

    if NO_TRAILER_MARKER.lower() in text.lower():
        return None

    video_id = extract_video_id(text)
    if video_id is None:
        return None
    return watch_url(video_id)


def parse_suggestions(text: str, limit: int = 10) -> List[Candidate]:
    """Parse 'Movie: <title> | Trailer: <url>' lines into candidates.

    Lines without the delimiter are skipped. A NO_TRAILER placeholder or an
    empty trailer part yields a candidate without a URL hint.

    Args:
        text: Raw suggestion response
        limit: Maximum number of candidates to return

    Returns:
        Candidates in response order, at most `limit` of them
    """
    candidates: List[Candidate] = []
    if not text:
        return candidates

    for line in text.splitlines():
        if len(candidates) >= limit:
            break
        if SUGGESTION_DELIMITER not in line:
            continue

        title_part, trailer_part = line.split(SUGGESTION_DELIMITER, 2)[:2]
        title = _MOVIE_LABEL_RE.sub("", _BULLET_RE.sub("", title_part)).strip()
        if not title:
            continue

        hint = _TRAILER_LABEL_RE.sub("", trailer_part).strip()
        if not hint or hint.upper() == NO_TRAILER_PLACEHOLDER:
            hint = None

        candidates.append(Candidate(title=title, trailer_hint=hint))

    return candidates
