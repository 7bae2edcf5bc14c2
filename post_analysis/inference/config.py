"""Inference configuration."""

from __future__ import annotations

from pydantic import Field

from post_analysis.common.config import AWSServiceConfig


class LanguageConfig(AWSServiceConfig):
    """Natural-language API configuration."""

    language_code: str = Field(
        default="en",
        description="Language of the analyzed documents",
        min_length=2,
    )

    # Comprehend's limits: 600 requests per minute for synchronous detection
    requests_per_minute: int = Field(
        default=600,
        description="Maximum request rate",
        ge=1,
    )
    max_text_bytes: int = Field(
        default=5000,
        description="Documents are truncated to this many UTF-8 bytes",
        ge=1,
        le=100_000,
    )

    # retries
    max_retries: int = Field(
        default=5,
        description="Attempts per request when throttled",
        ge=1,
        le=10,
    )
    backoff_min: float = Field(
        default=2.0,
        description="Minimum wait between throttled attempts in seconds",
        ge=0.0,
    )
    backoff_max: float = Field(
        default=30.0,
        description="Maximum wait between throttled attempts in seconds",
        ge=0.0,
    )
