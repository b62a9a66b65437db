"""Application configuration using Pydantic Settings."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings handed to an upstream API client."""

    api_key: str
    base_url: str
    timeout: float = 30.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Allergen Scan API"
    api_version: str = "1.0.0"

    # Google Gemini (menu photo understanding)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout: float = 60.0

    # Google Places
    google_maps_api_key: str = ""
    google_places_base_url: str = "https://maps.googleapis.com/maps/api/place"
    places_timeout: float = 30.0
    nearby_radius_m: int = 500

    # logo.dev
    logodev_api_key: str = ""
    logodev_base_url: str = "https://api.logo.dev"
    logo_timeout: float = 15.0

    # Matching thresholds
    restaurant_similarity_threshold: float = 0.4  # 0-1 name similarity
    restaurant_distance_threshold_m: float = 1000.0
    menu_similarity_threshold: float = 0.8

    @property
    def is_gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def is_places_configured(self) -> bool:
        return bool(self.google_maps_api_key)

    @property
    def is_logodev_configured(self) -> bool:
        return bool(self.logodev_api_key)

    def gemini_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.gemini_api_key,
            base_url=self.gemini_api_base_url,
            timeout=self.gemini_timeout,
        )

    def places_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.google_maps_api_key,
            base_url=self.google_places_base_url,
            timeout=self.places_timeout,
        )

    def logodev_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.logodev_api_key,
            base_url=self.logodev_base_url,
            timeout=self.logo_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
