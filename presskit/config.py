"""Configuration using pydantic-settings."""

import os
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with validation and constants."""

    host: str = "0.0.0.0"  # nosec B104 - Required for container deployment
    port: int = 8000
    log_level: str = "INFO"
    log_file: str | None = None

    environment: Literal["development", "docker", "lambda"] = "development"

    # Content source
    file_url_prefix: str = "https://raw.githubusercontent.com/jldec/presskit/main/content"
    index_file: str = "index.md"
    http_timeout: float = 10.0

    # Source-control API
    tree_url: str = "https://api.github.com/repos/jldec/presskit/git/trees/HEAD?recursive=TRUE"
    github_api_version: str = "2022-11-28"
    user_agent: str = "presskit-worker"
    gh_pat: str | None = None
    tree_rate_limit: str = "10/minute"

    # Key-value store
    redis_url: str | None = None
    store_url: str | None = None
    aws_region: str = "us-east-1"
    dynamodb_table: str = "presskit-page-cache"

    # Summarization
    llm_model: str = "gemini/gemini-1.5-flash-latest"
    llm_api_key: str | None = None
    llm_timeout: int = 30
    summary_max_length: int = 50

    @property
    def is_lambda_environment(self) -> bool:
        """Check if running in AWS Lambda."""
        return self.environment == "lambda" or bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME"))

    @property
    def effective_store_url(self) -> str:
        """Get the effective key-value store URL based on environment."""
        if self.store_url:
            return self.store_url
        if self.redis_url:
            return self.redis_url
        if self.is_lambda_environment:
            return f"dynamodb://{self.dynamodb_table}?region={self.aws_region}"
        return "memory://"

    @field_validator("file_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def validate_environment(self) -> "Settings":
        """Set environment based on PRESSKIT_ENV or AWS Lambda detection."""
        env = os.getenv("PRESSKIT_ENV", "").lower()
        if env in ("lambda", "docker", "development"):
            self.environment = env  # type: ignore[assignment]
        elif os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
            self.environment = "lambda"
        return self

    class Config:
        """Pydantic config."""

        env_prefix = "PRESSKIT_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
