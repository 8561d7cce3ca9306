"""Application configuration settings."""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List, Literal

# Get the package directory path
ASSISTANT_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    LLM_PROVIDER: Literal["gemini", "ollama"] = "gemini"
    LLM_MODEL: str = "gemini-flash-lite-latest"
    GEMINI_ENDPOINT: str = "https://generativelanguage.googleapis.com"
    GEMINI_API_KEYS: List[str] = []
    OLLAMA_ENDPOINT: str = "http://localhost:11434"

    # Per-request LLM timeout (seconds)
    LLM_TIMEOUT: int = 30

    # Interpreter policy
    TASK_DUE_IN_DAYS: int = 7
    CURRENCY_SYMBOL: str = "$"
    ERROR_NOTIFICATION: str = "My brain hurts... try again?"

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_limits(self) -> "Settings":
        if self.LLM_TIMEOUT <= 0:
            raise ValueError("LLM_TIMEOUT must be a positive number of seconds.")
        if self.TASK_DUE_IN_DAYS <= 0:
            raise ValueError("TASK_DUE_IN_DAYS must be at least one day.")
        return self

    class Config:
        env_file = str(ASSISTANT_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
