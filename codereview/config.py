from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from codereview.constants import DEFAULT_MAX_CHARS, DEFAULT_MODEL, DEFAULT_STORE_PATH

class Settings(BaseSettings):
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = DEFAULT_MODEL
    REVIEW_MAX_CHARS: int = DEFAULT_MAX_CHARS

    # "memory" keeps the latest review in-process, "sqlite" in REVIEW_STORE_PATH
    REVIEW_STORE: str = "memory"
    REVIEW_STORE_PATH: str = DEFAULT_STORE_PATH

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")
