"""Exception taxonomy for trailer lookups.

Sources raise these internally; they are converted into Failed outcomes at
the source boundary and never cross the public API as exceptions (except
ConfigurationError from TrailerAI.initialize).
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed taxonomy of lookup failures."""

    NETWORK = "network"
    API_KEY_MISSING = "api_key_missing"
    API_KEY_INVALID = "api_key_invalid"
    QUOTA_EXCEEDED = "quota_exceeded"
    PARSE_FAILURE = "parse_failure"
    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"


class TrailerError(Exception):
    """Base class for all trailer lookup errors."""

    kind: ErrorKind = ErrorKind.NETWORK

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NetworkError(TrailerError):
    """Transport or connectivity failure."""

    kind = ErrorKind.NETWORK


class APIKeyMissingError(TrailerError):
    """Credential not configured."""

    kind = ErrorKind.API_KEY_MISSING


class APIKeyInvalidError(TrailerError):
    """Credential rejected by the remote API."""

    kind = ErrorKind.API_KEY_INVALID


class QuotaExceededError(TrailerError):
    """Remote API rate limit or quota exhausted."""

    kind = ErrorKind.QUOTA_EXCEEDED


class ParseError(TrailerError):
    """Response present but unusable."""

    kind = ErrorKind.PARSE_FAILURE


class ConfigurationError(TrailerError):
    """Invalid SDK setup."""

    kind = ErrorKind.CONFIGURATION


class TrailerTimeoutError(TrailerError):
    """Call exceeded its time budget."""

    kind = ErrorKind.TIMEOUT
