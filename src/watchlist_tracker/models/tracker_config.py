"""Tracker configuration model ([tracker] section of tracker.toml)."""

from pydantic import BaseModel, Field, field_validator


class TrackerConfig(BaseModel):
    """Workspace-level settings for the tracker client and backend."""

    api_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the watchlist REST backend",
    )
    db_filename: str = Field(
        default="watchlist.db",
        description="SQLite database file name, relative to the workspace",
    )
    cache_dir: str = Field(
        default="cache",
        description="Local cache directory, relative to the workspace",
    )
    default_csv: str = Field(
        default="watchlist.csv",
        description="CSV file loaded on a cache miss, relative to the workspace",
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Remote request timeout in seconds (None: transport default)",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return value.rstrip("/")
