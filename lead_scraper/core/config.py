from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    APP_NAME: str = "Lead Scraper API"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"

    # Geocoding (place validation) configuration
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODER_USER_AGENT: str = "LeadScraper/1.0 (leads@example.com)"
    GEOCODER_TIMEOUT_SECONDS: float = 10.0

    # Search engine configuration
    SEARCH_BASE_URL: str = "https://www.google.com/search"

    # Browser configuration
    BROWSER_HEADLESS: bool = True
    NAVIGATION_TIMEOUT_MS: int = 30000
    RESULTS_WAIT_TIMEOUT_MS: int = 5000
    MAX_BROWSER_SESSIONS: Optional[int] = None


    class Config:
        env_file = ".env"  # Load values from .env file


settings = Settings()
