"""Configuration schema and validation using Pydantic.

Values come from ``GEMINI_*`` environment variables (optionally seeded from
a ``.env`` file) and programmatic overrides, validated and coerced here.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_study.core.types import RetryPolicy


class StudySettings(BaseSettings):
    """Pydantic settings schema for the study pipeline.

    Retry budgets for generation and embeddings are kept separate; their
    defaults are heuristics and meant to be tuned per deployment.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # .env loading is handled by resolve_config
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )

    model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for content generation",
        min_length=1,
    )

    embedding_model: str = Field(
        default="gemini-embedding-001",
        description="Model used for embeddings",
        min_length=1,
    )

    generate_max_retries: int = Field(default=4, ge=0)
    generate_base_delay_ms: int = Field(default=500, ge=0)
    embed_max_retries: int = Field(default=5, ge=0)
    embed_base_delay_ms: int = Field(default=400, ge=0)

    @property
    def has_api_key(self) -> bool:  # noqa: D102
        return bool(self.api_key and self.api_key.strip())

    def generate_policy(self) -> RetryPolicy:
        """Retry policy for generation calls."""
        return RetryPolicy.from_retries(
            self.generate_max_retries, self.generate_base_delay_ms
        )

    def embed_policy(self) -> RetryPolicy:
        """Retry policy for embedding calls."""
        return RetryPolicy.from_retries(self.embed_max_retries, self.embed_base_delay_ms)

    def redacted(self) -> dict[str, Any]:
        """Settings as a dict with the API key masked, safe to log."""
        data = self.model_dump()
        data["api_key"] = "[SET]" if self.has_api_key else "[NOT SET]"
        return data
