"""Configuration loading and validation for trailer-ai."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.logging import RichHandler

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")


def load_config() -> dict:
    """Load configuration from environment variables."""

    def optional_key(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None

    config = {
        # API keys (both optional; the pattern source always works)
        "gemini_api_key": optional_key("GEMINI_API_KEY"),
        "youtube_api_key": optional_key("YOUTUBE_API_KEY"),
        # Model configuration
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        # Per-call timeout applied to every source invocation
        "timeout_seconds": float(os.getenv("TRAILER_TIMEOUT_SECONDS", "10")),
        "enable_logging": os.getenv("TRAILER_ENABLE_LOGGING", "false").lower() == "true",
        # Reserved: each source is attempted exactly once per lookup
        "max_retries": int(os.getenv("TRAILER_MAX_RETRIES", "3")),
        "youtube_max_results": int(os.getenv("YOUTUBE_MAX_RESULTS", "5")),
        # Batch suggestion / enrichment limits
        "max_suggestions": int(os.getenv("MAX_SUGGESTIONS", "10")),
        "batch_intake_limit": int(os.getenv("BATCH_INTAKE_LIMIT", "5")),
        "batch_result_limit": int(os.getenv("BATCH_RESULT_LIMIT", "5")),
        "batch_budget_multiplier": float(os.getenv("BATCH_BUDGET_MULTIPLIER", "2.0")),
    }

    return config


@dataclass(frozen=True)
class TrailerAIConfig:
    """Immutable SDK configuration shared by every source and the resolver."""

    gemini_api_key: Optional[str] = None
    youtube_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    timeout_seconds: float = 10.0
    enable_logging: bool = False
    max_retries: int = 3
    youtube_max_results: int = 5
    max_suggestions: int = 10
    batch_intake_limit: int = 5
    batch_result_limit: int = 5
    batch_budget_multiplier: float = 2.0

    @classmethod
    def from_dict(cls, config: dict) -> "TrailerAIConfig":
        """Build a config from a load_config()-style dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config.items() if k in known})

    @classmethod
    def from_env(cls) -> "TrailerAIConfig":
        """Build a config from environment variables (and the project .env)."""
        return cls.from_dict(load_config())

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @property
    def has_youtube_key(self) -> bool:
        return bool(self.youtube_api_key and self.youtube_api_key.strip())

    @property
    def batch_budget_seconds(self) -> float:
        """Overall time budget for one batch enrichment call."""
        return self.timeout_seconds * self.batch_budget_multiplier


def validate_config(config: TrailerAIConfig) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if config.timeout_seconds <= 0:
        errors.append(f"timeout_seconds must be positive, got {config.timeout_seconds}")

    if config.max_retries < 0:
        errors.append(f"max_retries cannot be negative, got {config.max_retries}")

    for name in ("youtube_max_results", "max_suggestions", "batch_intake_limit", "batch_result_limit"):
        value = getattr(config, name)
        if value < 1:
            errors.append(f"{name} must be at least 1, got {value}")

    if config.youtube_max_results > 50:
        # YouTube search.list page limit
        errors.append(f"youtube_max_results cannot exceed 50, got {config.youtube_max_results}")

    if config.batch_budget_multiplier < 1:
        errors.append(
            f"batch_budget_multiplier must be at least 1, got {config.batch_budget_multiplier}"
        )

    if not config.gemini_model or not config.gemini_model.strip():
        errors.append("gemini_model cannot be blank")

    return errors


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration with Rich for terminal output."""
    # Clear any existing handlers
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,  # Disable markup to avoid conflicts
    )

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )

    # Suppress noisy third-party loggers
    noisy_loggers = [
        "httpx",
        "google_genai",
        "google_genai.models",
        "googleapiclient.discovery_cache",
        "urllib3.connectionpool",
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
