"""
Furniture Estimator settings.

Configuration loaded from environment variables (and an optional .env file).
"""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Estimator service configuration."""

    app_name: str = "furniture-estimator"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"

    # Catalog
    seed_catalog: bool = True
    default_category_image: str = "https://placehold.co/400x300.png"
    default_option_image: str = "https://placehold.co/50x50.png"
    default_size_image: str = "https://placehold.co/80x80.png"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def json_logs(self) -> bool:
        return self.log_format.lower() == "json"

    def get_cors_origins(self) -> List[str]:
        """
        Get list of allowed CORS origins.

        Returns:
            Origins parsed from the comma-separated setting.
        """
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance.
    """
    return Settings()
