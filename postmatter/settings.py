from pathlib import Path

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
    CONTENT_DIR: Path = Path("content/posts")
    CONTENT_ENCODING: str = "utf-8"
    INCLUDE_DRAFTS: bool = False

    # Batch loading (1 = sequential)
    LOAD_WORKERS: int = 4

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    POSTMATTER_API_KEY: str = ""


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
