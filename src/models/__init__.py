# Data models for trailer-ai
from .trailer import (
    NOT_FOUND,
    Candidate,
    EnrichedResult,
    ErrorKind,
    Failed,
    Found,
    NotFound,
    Outcome,
    Query,
    SourceTag,
)

__all__ = [
    "Query",
    "Outcome",
    "Found",
    "Failed",
    "NotFound",
    "NOT_FOUND",
    "SourceTag",
    "ErrorKind",
    # Batch mode
    "Candidate",
    "EnrichedResult",
]
