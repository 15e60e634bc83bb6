"""Runtime configuration for VidShare, read from the environment and `.env`."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Every tunable knob, keyed by its environment variable alias."""

    # Application metadata
    app_name: str = Field(default="VidShare API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Secrets and diagnostics
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Persistence
    database_url: str = Field(default="sqlite:///./vidshare.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Redis backs the view-dedupe and rate-limit stores; unset keeps them in process.
    redis_url: str | None = Field(default=None, alias="REDIS_URL")

    # Bearer tokens
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # View counting
    view_dedupe_window_seconds: int = Field(default=86_400, alias="VIEW_DEDUPE_WINDOW_SECONDS")
    # 0 disables FIFO eviction of older entries.
    view_dedupe_capacity: int = Field(default=100, ge=0, alias="VIEW_DEDUPE_CAPACITY")
    view_cookie_name: str = Field(default="viewed_videos", alias="VIEW_COOKIE_NAME")
    cookie_secure: bool = Field(default=False, alias="COOKIE_SECURE")

    # Monetization
    payout_minimum: float = Field(default=100.0, alias="PAYOUT_MINIMUM")
    monetization_min_subscribers: int = Field(
        default=1000,
        alias="MONETIZATION_MIN_SUBSCRIBERS",
    )

    # Moderation
    strike_expiry_days: int = Field(default=90, alias="STRIKE_EXPIRY_DAYS")
    strike_suspension_threshold: int = Field(default=3, alias="STRIKE_SUSPENSION_THRESHOLD")
    reporter_trust_bonus: int = Field(default=2, alias="REPORTER_TRUST_BONUS")

    # Contact form throttling
    contact_rate_limit_max: int = Field(default=3, alias="CONTACT_RATE_LIMIT_MAX")
    contact_rate_limit_window_seconds: int = Field(
        default=3600,
        alias="CONTACT_RATE_LIMIT_WINDOW_SECONDS",
    )

    # Browser clients
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
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
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Database URL in use, preferring the test database when enabled."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
