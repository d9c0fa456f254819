"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (Twilio credentials, sender, etc.)
- Snapshots provider credentials into a read-only ProviderConfig
- Environment-specific settings
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal, List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Twilio WhatsApp
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_WHATSAPP_FROM: Optional[str] = Field(
        default=None,
        description="Sender address, e.g. whatsapp:+14155238886"
    )
    TWILIO_API_BASE_URL: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


class ProviderConfig(BaseModel):
    """
    Read-only snapshot of the Twilio credentials.
    Built once at startup and injected into the dispatch service.
    """

    model_config = ConfigDict(frozen=True)

    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    whatsapp_from: Optional[str] = None
    api_base_url: str = "https://api.twilio.com/2010-04-01"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderConfig":
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            whatsapp_from=settings.TWILIO_WHATSAPP_FROM,
            api_base_url=settings.TWILIO_API_BASE_URL,
        )

    def missing_fields(self) -> List[str]:
        """
        Environment variable names of every required value that is unset.
        Whitespace-only values count as unset.
        """
        required = (
            ("TWILIO_ACCOUNT_SID", self.account_sid),
            ("TWILIO_AUTH_TOKEN", self.auth_token),
            ("TWILIO_WHATSAPP_FROM", self.whatsapp_from),
        )
        return [name for name, value in required if not (value or "").strip()]


# Global settings instance
settings = Settings()


def validate_settings() -> List[str]:
    """
    Checks provider settings on application startup.

    Returns the list of missing provider settings. Missing values do not
    abort startup: the send endpoint reports them to the operator.
    """
    return ProviderConfig.from_settings(settings).missing_fields()
