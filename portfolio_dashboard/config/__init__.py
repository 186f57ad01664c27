"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Holdings
    # ======================
    HOLDINGS_FILE: str = "config/holdings.yml"

    # ======================
    # Quote source
    # ======================
    QUOTE_PROVIDER: str = "yfinance"
    QUOTE_API_URL: str = "http://localhost:3000/api/realTimePrice"
    QUOTE_API_KEY: Optional[str] = None
    QUOTE_TIMEOUT_SECONDS: float = 10.0

    # Yahoo ticker resolution
    YF_DEFAULT_SUFFIX: str = ".NS"
    YF_SYMBOL_OVERRIDES: str = ""

    # ======================
    # Polling
    # ======================
    POLL_INTERVAL_MS: int = 6000
    POLL_STRICT_ORDERING: bool = False

    # ======================
    # Presentation
    # ======================
    # None -> host local timezone
    EARNINGS_TIMEZONE: Optional[str] = None
    CURRENCY_SYMBOL: str = "₹"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
