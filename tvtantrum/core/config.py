from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_NAME: str = "TV Tantrum"
    APP_ENV: Literal["development", "production"] = "production"

    REDIS_URL: str = "redis://redis:6379/0"
    # Maximum number of connections Redis client will open per process
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "tvtantrum:"

    # JSON file the in-memory catalog is loaded from (and written to by the importer)
    CATALOG_PATH: str = "data/shows.json"

    # Reviewed-shows dataset
    GITHUB_OWNER: str = "ledhaseeb"
    GITHUB_REPO: str = "tvtantrum"
    GITHUB_BRANCH: str = "main"
    GITHUB_DATA_PATH: str = "database"
    GITHUB_TOKEN: str | None = None

    DEFAULT_RECOMMENDATION_LIMIT: int = 5
    DEFAULT_SIMILAR_SHOWS_LIMIT: int = 4
    DEFAULT_POPULAR_SHOWS_LIMIT: int = 10
    # Upper bound on candidates scored per recommendation request
    RECOMMENDATION_CANDIDATE_CAP: int = 500


settings = Settings()
