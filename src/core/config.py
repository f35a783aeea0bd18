"""
Core configuration and settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    APP_NAME: str = "Inquiry Router API"

    # Translation (Google Translate v2)
    GOOGLE_TRANSLATE_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_TRANSLATE_API_KEY", "TRANSLATE_API_KEY")
    )
    TRANSLATE_API_URL: str = "https://translation.googleapis.com/language/translate/v2"
    TRANSLATE_TIMEOUT_SECONDS: float = 10.0

    # Routing
    DEFAULT_LANGUAGE: str = "en"
    AUTO_RESPONSE_ENABLED: bool = True
    RECENT_INQUIRIES_DEFAULT: int = 10
    SEED_DEFAULT_DATA: bool = True

    # Reply variables
    DEFAULT_SUBSCRIPTION_TYPE: str = "Premium"
    SUPPORT_LINK: str = "https://support.example.com"
    BILLING_DATE_FORMAT: str = "%m/%d/%Y"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG_MODE: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True
    )


# Global settings instance
settings = Settings()
