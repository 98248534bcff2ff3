"""Configuration management for smartlist."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"
    log_level: str = "info"

    # Export
    export_dir: str = "./data/exports"
    default_list_name: str = "Smart Shopping List"

    # Pricing (USD)
    default_item_price: Decimal = Decimal("3.99")  # Items with no price table entry
    minimum_item_price: Decimal = Decimal("0.50")  # Smallest pack you can buy
    expensive_item_price: Decimal = Decimal("10.00")  # Above this, suggest substitutions

    # Shopping time model (minutes)
    base_shopping_minutes: float = 5
    minutes_per_item: float = 0.5
    minutes_per_section: float = 2
    minimum_shopping_minutes: float = 10

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
