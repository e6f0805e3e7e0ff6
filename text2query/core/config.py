from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AppSettings, OllamaModels


class Settings(BaseSettings):
    """Application settings loaded from environment + defaults"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: str = "development"
    OLLAMA_MODEL: OllamaModels = AppSettings.OLLAMA_MODEL
    OLLAMA_BASE_URL: str = AppSettings.OLLAMA_BASE_URL
    OLLAMA_API_KEY: str | None = None
    HOST: str = AppSettings.HOST
    PORT: int = AppSettings.PORT

    # Client side
    API_URL: str = AppSettings.API_URL
    HISTORY_FILE: str = AppSettings.HISTORY_FILE

    @property
    def ollama_config(self) -> dict:
        config = {
            "model": self.OLLAMA_MODEL.value,
            "base_url": self.OLLAMA_BASE_URL,
        }
        # Hosted Ollama endpoints expect a bearer token
        if self.OLLAMA_API_KEY:
            config["client_kwargs"] = {
                "headers": {"Authorization": f"Bearer {self.OLLAMA_API_KEY}"}
            }
        return config


@lru_cache()
def get_settings() -> Settings:
    return Settings()
