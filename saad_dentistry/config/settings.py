"""
Application settings and configuration.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from .database import DatabaseConfig
from .external_apis import PaymentGatewayConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SaaD Dentistry"
    app_version: str = "1.0.0"
    debug: bool = False
    port: int = 5000

    # Database
    database_path: str = "saad_dentistry.db"
    database_timeout: float = 30.0

    # Payment gateway
    stripe_secret_key: Optional[str] = None
    stripe_api_base: str = "https://api.stripe.com"
    payment_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    def database_config(self) -> DatabaseConfig:
        """Build the database config section."""
        return DatabaseConfig(path=self.database_path, timeout=self.database_timeout)

    def payment_gateway_config(self) -> PaymentGatewayConfig:
        """Build the payment gateway config section."""
        return PaymentGatewayConfig(
            base_url=self.stripe_api_base,
            secret_key=self.stripe_secret_key,
            timeout=self.payment_timeout,
        )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
