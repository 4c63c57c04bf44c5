from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Loads and validates application settings from the environment and .env."""
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    app_name: str = "MindWatch API"
    app_version: str = "1.0.0"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Gemini
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")
    # Larger model: conversational replies and emotion analysis
    primary_model: str = Field(default="models/gemini-2.0-flash", alias="PRIMARY_MODEL")
    # Smaller, faster model: suggestions and weekly summaries
    fast_model: str = Field(default="models/gemini-2.0-flash-lite", alias="FAST_MODEL")
    model_timeout_seconds: float = Field(default=30.0, gt=0, alias="MODEL_TIMEOUT_SECONDS")
    chat_history_limit: int = Field(default=10, ge=1, alias="CHAT_HISTORY_LIMIT")

    # MongoDB
    mongo_uri: Optional[str] = Field(default=None, alias="MONGO_URI")
    db_name: str = Field(default="mindwatch", alias="DB_NAME")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
