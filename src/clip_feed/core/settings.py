"""Application settings and configuration.

This module defines all configuration options for the Clip Feed application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Clip Feed", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./clip_feed.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Feed pagination
    feed_default_limit: int = Field(default=12, alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=50, alias="FEED_MAX_LIMIT")

    # Vote ledger
    daily_vote_limit: int = Field(default=200, alias="DAILY_VOTE_LIMIT")
    default_vote_weight: int = Field(default=1, ge=1, alias="DEFAULT_VOTE_WEIGHT")
    # Voter id -> weight. Listed voters are also exempt from the daily limit.
    elevated_voter_weights: dict[str, int] = Field(
        default_factory=dict,
        alias="ELEVATED_VOTER_WEIGHTS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("elevated_voter_weights")
    @classmethod
    def _positive_weights(cls, value: dict[str, int]) -> dict[str, int]:
        bad = sorted(voter_id for voter_id, weight in value.items() if weight < 1)
        if bad:
            raise ValueError(f"Vote weights must be positive integers; check {', '.join(bad)}")
        return value


settings = Settings()  # type: ignore[call-arg]
