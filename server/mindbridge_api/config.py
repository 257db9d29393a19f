"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Storage
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    db_name: str = "mindbridge.db"

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_path, self.db_name)

    # Sessions and accounts
    session_ttl_hours: float = 24.0
    auth_delay_seconds: float = 0.0
    password_hash_iterations: int = 120_000

    # Quotes and translations (read-only assets fetched by path convention)
    assets_base_url: str = "http://127.0.0.1:3000"
    default_language: str = "en"
    supported_languages: list[str] = ["en", "hi", "bho", "mr", "te"]
    translation_ready_timeout: float = 3.0
    fetch_timeout: float = 5.0

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_prefix = "MINDBRIDGE_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
