"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

VALID_DISTRICT_SOURCES = frozenset({"static", "database"})


class Settings(BaseSettings):
    """senkyoku configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Discord
    discord_bot_token: str = ""
    discord_guild_id: str = ""
    discord_enabled: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///senkyoku.db"

    # Environment
    senkyoku_env: str = "development"

    # District counts: "static" uses the compiled table, "database" queries
    # the prefectures table on every command.
    senkyoku_district_source: str = "static"
    senkyoku_seed_districts: bool = True  # Fill missing prefectures rows at startup

    # Logging
    senkyoku_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_district_source(self) -> Settings:
        """Reject unknown district sources and a database source with no database."""
        source = self.senkyoku_district_source.strip().lower()
        if source not in VALID_DISTRICT_SOURCES:
            allowed = ", ".join(sorted(VALID_DISTRICT_SOURCES))
            msg = f"SENKYOKU_DISTRICT_SOURCE must be one of: {allowed} (got {source!r})"
            raise ValueError(msg)
        if source == "database" and not self.database_url:
            msg = "DATABASE_URL must be set when SENKYOKU_DISTRICT_SOURCE=database"
            raise ValueError(msg)
        self.senkyoku_district_source = source
        return self

    @model_validator(mode="after")
    def _require_guild_in_production(self) -> Settings:
        """Commands are synced per guild in production; a missing guild ID is a misconfiguration."""
        if (
            self.senkyoku_env == "production"
            and self.discord_enabled
            and not self.discord_guild_id
        ):
            msg = "DISCORD_GUILD_ID must be set in production when Discord is enabled."
            raise ValueError(msg)
        return self
