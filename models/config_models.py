"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsConfig(BaseModel):
    """API credentials loaded from environment variables."""

    # Optional: unauthenticated requests work, with a lower rate limit
    github_token: Optional[str] = Field(None, description="GitHub personal access token")

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty token as absent, reject the .env.example placeholder."""
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if v == "ghp_your_token_here":
            raise ValueError(
                "GitHub token must be a real token or left unset "
                "(found the .env.example placeholder)"
            )
        return v


class Config(BaseModel):
    """Application configuration."""

    credentials: CredentialsConfig
    github_api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL")
    issues_per_page: int = Field(default=30, ge=1, le=100, description="Default issues per page")
    request_timeout: float = Field(default=30, gt=0, description="HTTP request timeout in seconds")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("github_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("GitHub API URL must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper
