"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings
from typing import List, Literal
import os


_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys - Must be set via environment variables
    OPENAI_API_KEY: str = ""  # Required for the openai provider
    ANTHROPIC_API_KEY: str = ""  # Optional: for Claude LLM

    # Provider
    LLM_PROVIDER: Literal["openai", "anthropic"] = "openai"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 2000

    # Input limits (the UI textarea uses the same value)
    MAX_CODE_LENGTH: int = 10000

    # History
    HISTORY_BACKEND: Literal["memory", "jsonl"] = "memory"
    HISTORY_FILE: str = "./data/history.jsonl"

    # Static UI
    STATIC_DIR: str = os.path.join(_BACKEND_DIR, "static")

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5000",
        "http://127.0.0.1:5173",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
