"""Application configuration management using Pydantic's BaseSettings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Defines all configuration settings for the client, loaded from .env file."""

    # API Keys
    juhe_api_key: Optional[str] = None

    # App settings
    debug: bool = False
    log_level: str = "INFO"

    # Juhe simpleWeather settings
    juhe_base_url: str = "http://apis.juhe.cn"
    request_timeout: float = 10.0

    # Store defaults
    initial_city: str = "Beijing"
    default_favorites: List[str] = []

    # Drop results of fetches superseded by a newer city selection
    discard_stale_results: bool = True

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured log level."""
        return "DEBUG" if self.debug else self.log_level.upper()

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"
        env_prefix = "WEATHERCARD_"


settings = Settings()
