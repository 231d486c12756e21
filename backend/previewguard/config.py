"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM provider (any OpenAI-compatible endpoint)
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_TIMEOUT_SECONDS: float = 120.0

    # Sanitizer
    SANITIZER_MODEL: str = "openai/gpt-oss-20b"
    SANITIZER_TEMPERATURE: float = 0.3
    SANITIZER_MAX_TOKENS: int = 8192
    MAX_SANITIZE_ATTEMPTS: int = 2

    # Prompt files (empty = prompts bundled with the package)
    PROMPTS_DIR: str = ""

    # Admin endpoints (empty = no key required)
    ADMIN_API_KEY: str = ""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
