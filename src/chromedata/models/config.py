from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

ADS_ENDPOINT: str = "http://services.chromedata.com/Description/7b?wsdl"


class AppSettings(BaseSettings):
    """Application-wide settings populated from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHROMEDATA_",
        extra="ignore",
    )

    account_number: str | None = None
    account_secret: str | None = None
    endpoint: str = ADS_ENDPOINT
    country: str = "US"
    language: str = "en"
    timeout: float = 30.0
    concurrency: int = 15
    profile: str = "default"
    output_format: str | None = None
