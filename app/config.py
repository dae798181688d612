"""
JetSet Backend Configuration
Environment variables and application settings
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 5004
    debug: bool = False
    log_level: str = "INFO"

    # Amadeus Self-Service API
    amadeus_api_key: str = ""
    amadeus_api_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"
    amadeus_timeout: float = 30.0
    # Reuse the OAuth token until shortly before it expires.
    # When False a fresh token is requested for every operation.
    amadeus_reuse_token: bool = True

    # Search
    default_currency: str = "USD"
    hotel_search_radius: int = 5
    hotel_offer_batch_size: int = 20  # hotelIds per hotel-offers call
    max_hotel_results: int = 15
    max_flight_results: int = 20

    # Substitute generated placeholder data when Amadeus fails or is empty
    enable_fallback_data: bool = True

    # Destinations reference list
    destinations_cache_ttl: int = 24 * 60 * 60  # seconds

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def amadeus_configured(self) -> bool:
        return bool(self.amadeus_api_key and self.amadeus_api_secret)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
