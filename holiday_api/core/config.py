from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings and configuration"""

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Holiday API"

    # Upstream holiday provider (Nager.Date compatible)
    HOLIDAYS_API_URL: str = "https://date.nager.at/api/v3/PublicHolidays/"
    HOLIDAYS_API_TIMEOUT: float = 10.0  # Seconds, single attempt

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "human"  # "human" | "json"


settings = Settings()
