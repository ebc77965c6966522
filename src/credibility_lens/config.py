from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API Key, needed only for the real model")
    OPENAI_BASE_URL: Optional[str] = Field(None, description="Alternative OpenAI-compatible endpoint")
    MODEL: str = "gpt-4o"
    MODEL_TIMEOUT_SECONDS: float = Field(120.0, description="Upper bound for a single model call")
    MODEL_JSON_MODE: bool = Field(True, description="Ask the model for a bare JSON object")
    ARTICLE_REPORT: str = Field("article_credibility", description="Report shape used for articles")
    FETCH_TIMEOUT_SECONDS: float = 15.0
    FETCH_MAX_CHARS: int = Field(14000, description="Article text is truncated to this length")
    LOG_LEVEL: str = "INFO"
    
    # MLflow settings
    MLFLOW_TRACKING_URI: str = Field("http://127.0.0.1:5000", description="MLflow tracking server URI")
    MLFLOW_ENABLE_TRACING: bool = Field(True, description="Enable MLflow tracing")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
