"""Environment-driven settings for the payment order service.

Built once at startup and handed to the gateway client and services, so tests
can construct a `Settings` with fake credentials instead of patching the
environment (see `.env.example`).
"""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payorder"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5001
    razorpay_key_id: str | None = None
    razorpay_key_secret: SecretStr | None = None
    razorpay_api_url: str = "https://api.razorpay.com/v1"
    gateway_mode: Literal["razorpay", "sandbox"] = "razorpay"
    gateway_timeout_seconds: float = 5.0
    redis_timeout_seconds: float = 5.0
    default_currency: str = "INR"
    redis_url: str | None = None
    processed_payment_ttl_seconds: int = 7 * 86400
    allowed_origins: str = "*"
    content_security_policy: str = "default-src * 'unsafe-inline' 'unsafe-eval' data: blob:;"
    tracing_enabled: bool = False
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def key_secret(self) -> str:
        """Plain shared secret, or an empty string when unset."""

        if self.razorpay_key_secret is None:
            return ""
        return self.razorpay_key_secret.get_secret_value()

    @property
    def gateway_credentials_loaded(self) -> bool:
        return bool(self.razorpay_key_id) and bool(self.key_secret)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["*"]


def load_settings() -> Settings:
    """Read settings from the process environment."""

    return Settings()
