from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Project metadata
    PROJECT_NAME: str = "Summarizer"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Text, transcript and YouTube video summarization API"

    # API configuration
    API_V1_STR: str = "/api/v1"

    # CORS settings
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Environment
    DEBUG: bool = False
    LOG_LEVEL: Optional[str] = None  # overrides the DEBUG-derived level

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Groq
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # OpenRouter
    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_MODEL: str = "meta-llama/llama-3.1-70b-instruct"

    # Default platform
    DEFAULT_LLM_PLATFORM: str = "gemini"

    # YouTube Data API
    YOUTUBE_API_KEY: Optional[str] = None
    TRANSCRIPT_LANGUAGES: List[str] = ["en"]

    # Upstream timeouts (seconds) and retry
    LLM_TIMEOUT_SECONDS: float = 60.0
    UPSTREAM_TIMEOUT_SECONDS: float = 20.0
    LLM_MAX_RETRIES: int = 0  # 0 = exactly one model call per request
    LLM_RETRY_BASE_DELAY: float = 3.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
