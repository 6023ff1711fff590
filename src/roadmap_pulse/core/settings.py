"""Application settings and configuration.

This module defines all configuration options for the Roadmap Pulse service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Stock vote weighting tables, shared with VoteWeightConfig.
DEFAULT_ROLE_WEIGHTS: dict[str, float] = {
    "USER": 1.0,
    "PM": 2.0,
    "PO": 3.0,
    "RESEARCHER": 1.5,
    "MODERATOR": 1.0,
    "ADMIN": 1.0,
}
DEFAULT_VILLAGE_PRIORITY_WEIGHTS: dict[str, float] = {"high": 1.5, "medium": 1.0, "low": 0.5}
DEFAULT_PANEL_MEMBERSHIP_BOOST = 0.3
DEFAULT_VOTE_HALF_LIFE_DAYS = 180.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Dictionary-valued settings (``ROLE_WEIGHTS``, ``VILLAGE_PRIORITY_WEIGHTS``)
    are read as JSON objects.
    """

    # Application metadata
    app_name: str = Field(default="Roadmap Pulse", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./roadmap_pulse.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Vote weighting
    role_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_ROLE_WEIGHTS),
        alias="ROLE_WEIGHTS",
    )
    village_priority_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_VILLAGE_PRIORITY_WEIGHTS),
        alias="VILLAGE_PRIORITY_WEIGHTS",
    )
    panel_membership_boost: float = Field(
        default=DEFAULT_PANEL_MEMBERSHIP_BOOST,
        alias="PANEL_MEMBERSHIP_BOOST",
    )
    vote_half_life_days: float = Field(
        default=DEFAULT_VOTE_HALF_LIFE_DAYS,
        gt=0,
        alias="VOTE_HALF_LIFE_DAYS",
    )

    # Duplicate detection
    duplicate_similarity_threshold: float = Field(
        default=0.86,
        ge=0.0,
        le=1.0,
        alias="DUPLICATE_SIMILARITY_THRESHOLD",
    )

    # Trending feedback
    trending_max_age_days: int = Field(default=14, ge=1, alias="TRENDING_MAX_AGE_DAYS")
    trending_limit: int = Field(default=10, ge=1, alias="TRENDING_LIMIT")
    trending_min_votes: int = Field(default=1, ge=0, alias="TRENDING_MIN_VOTES")
    # The dashboard widget asks for fewer items than the ranker default.
    trending_widget_limit: int = Field(default=5, ge=1, alias="TRENDING_WIDGET_LIMIT")

    # Panel quota health (absolute deviation in percentage points)
    quota_on_track_deviation: float = Field(default=5.0, alias="QUOTA_ON_TRACK_DEVIATION")
    quota_warning_deviation: float = Field(default=15.0, alias="QUOTA_WARNING_DEVIATION")
    quota_absolute_avg_deviation: bool = Field(
        default=False,
        alias="QUOTA_ABSOLUTE_AVG_DEVIATION",
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
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def quota_thresholds(self) -> dict[str, float]:
        """Return quota status cut-offs as a convenience dictionary."""
        return {
            "on_track": self.quota_on_track_deviation,
            "warning": self.quota_warning_deviation,
        }


settings = Settings()
