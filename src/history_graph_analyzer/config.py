"""Configuration management for History Graph Analyzer."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HGA_",
    )

    # Encyclopedia source
    wiki_base_url: str = Field(default="https://en.wikipedia.org")
    user_agent: str = Field(default="HistoryGraphAnalyzer/0.1 (historical network research)")
    request_timeout: float = Field(default=30.0, description="Seconds before a page fetch is abandoned")
    search_limit: int = Field(default=10)

    # Batch processing
    throttle_seconds: float = Field(default=1.0, description="Fixed delay before each batch task")
    max_workers: int = Field(default=8, ge=0, description="0 means one worker per batch item")

    # Neo4j connection
    neo4j_uri: str = Field(default="bolt://localhost:7687")
    neo4j_user: str = Field(default="neo4j")
    neo4j_password: str = Field(default="historygraph")

    # Paths
    data_dir: Path = Field(default=Path("data"))

    @property
    def exports_dir(self) -> Path:
        return self.data_dir / "exports"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
