"""
Configuration management for the achievements scraper.

Loads settings from environment variables and config file, with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ISAAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    cache_dir: Path = Field(
        default_factory=lambda: Path(".cache/isaac"),
        description="Cache storage directory",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    wiki_base: str = Field(
        default="https://bindingofisaacrebirth.wiki.gg",
        description="Wiki origin used to absolutize links and images",
    )
    page: str = Field(default="Achievements", description="Wiki page holding the tables")
    min_achievements: int = Field(
        default=500, ge=0, description="Fewer records than this means the layout changed"
    )
    user_agent: str = Field(
        default="IsaacAchievementsTracker/1.0 (achievement list scraper)",
        description="User-Agent header sent to the wiki",
    )
    page_ttl: int = Field(default=86_400, ge=0, description="Seconds to keep a fetched page")
    heuristics_file: Path | None = Field(
        default=None, description="YAML file overriding the packaged keyword rules"
    )

    @property
    def api_url(self) -> str:
        return f"{self.wiki_base.rstrip('/')}/api.php"

    @property
    def source_url(self) -> str:
        return f"{self.wiki_base.rstrip('/')}/wiki/{self.page}"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
