from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List

class Settings(BaseSettings):
    # Completion endpoint (OpenAI-compatible)
    NVIDIA_API_KEY: str | None = None
    NVIDIA_BASE_URL: str = "https://integrate.api.nvidia.com/v1"
    NVIDIA_MODEL: str = "meta/llama-3.3-70b-instruct"
    API_KEY_PREFIX: str = "nvapi-"
    MOCK_MODE: bool = False

    # Sampling
    TEMPERATURE: float = 0.25
    TOP_P: float = 0.75
    MAX_TOKENS: int = 8192
    UPSTREAM_TIMEOUT: float | None = None

    # Input / output policy
    MIN_CONTENT_CHARS: int = 30
    MAX_CONTENT_CHARS: int = 12000
    MIN_QUESTIONS: int = 10
    REQUIRE_ANSWER: bool = True
    REQUIRE_JSON_CONTENT_TYPE: bool = True
    EXAM_AUDIENCE: str = "pharmacy student"

    # CORS
    ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()

def get_settings() -> Settings:
    return settings
