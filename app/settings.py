from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    POSTS_DIR: str = "posts"

    # Rendering
    READING_WPM: int = Field(200, gt=0)
    TOC_MIN_LEVEL: int = 2
    TOC_MAX_LEVEL: int = 3

    # Keep a process-wide snapshot of all posts (production builds)
    CACHE_POSTS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def posts_path(self) -> Path:
        return Path(self.POSTS_DIR)

    @property
    def toc_levels(self) -> tuple[int, int]:
        return self.TOC_MIN_LEVEL, self.TOC_MAX_LEVEL


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
