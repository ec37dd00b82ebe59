"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # GitHub
    github_token: Optional[str] = Field(
        default=None,
        description="GitHub personal access token (required for searches)",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )

    # Oracle (OpenRouter-compatible chat completions)
    openrouter_api_key: Optional[str] = Field(
        default=None,
        description="OpenRouter API key; oracle steps fall back when unset",
    )
    oracle_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="Chat completions endpoint",
    )
    oracle_model: str = Field(
        default="meta-llama/llama-3.2-3b-instruct:free",
        description="Model name sent with every oracle request",
    )
    oracle_referer: str = Field(
        default="https://talent-radar.local",
        description="HTTP-Referer header sent to the oracle",
    )
    oracle_title: str = Field(
        default="Talent Radar",
        description="X-Title header sent to the oracle",
    )
    oracle_max_tokens: int = Field(
        default=1000,
        description="max_tokens for oracle completions",
    )

    # HTTP
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Total timeout for a single outbound request",
    )
    http_retries: int = Field(
        default=3,
        description="Attempts per request on 429/5xx/timeouts",
    )

    # Search pipeline
    min_match_score: int = Field(
        default=70,
        description="Admission threshold for candidates (0-100)",
    )
    max_candidates: int = Field(
        default=100,
        description="Maximum candidates returned per search",
    )
    search_results_per_keyword: int = Field(
        default=30,
        description="Repositories requested per keyword search",
    )
    candidate_repo_limit: int = Field(
        default=10,
        description="Top repositories (by stars) used to score a candidate",
    )
    enrichment_delay_seconds: float = Field(
        default=0.1,
        description="Minimum spacing between per-candidate enrichment calls",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for the rotating log file",
    )

    # Paths
    config_dir: Path = Field(
        default=Path(__file__).parent,
        description="Configuration directory",
    )

    @property
    def vocabulary_path(self) -> Path:
        """Path to the technologies.yaml keyword vocabulary."""
        return self.config_dir / "technologies.yaml"


# Global settings instance
settings = Settings()
