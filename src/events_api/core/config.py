"""Application settings, read from the environment and an optional .env file."""

from functools import lru_cache
from typing import Self
from urllib.parse import urlparse

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRET = "change-this-to-a-secure-random-string"
MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Events API"
    app_env: str = "development"  # development | testing | production
    debug: bool = False
    enable_openapi: bool = True
    app_url: str = "http://localhost:3000"  # frontend base for reset links
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]
    cors_origins: list[str] = ["http://localhost:3000"]
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"
    log_user_emails: bool = False
    shutdown_grace_period: int = 30

    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    redis_url: str | None = None
    redis_pool_size: int = 10

    # One signing secret per token kind
    access_token_secret: str
    refresh_token_secret: str
    reset_token_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    reset_token_expire_minutes: int = 60
    session_tracking_enabled: bool = True
    reset_token_single_use: bool = True

    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    auth_rate_limit: str = "20 per 15 minutes"
    general_rate_limit: str = "20 per 5 seconds"

    metrics_api_key: str | None = None

    # Without an API key, mail and SMS are logged instead of sent
    resend_api_key: str | None = None
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    sms_send_timeout_seconds: int = 10

    s3_endpoint: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_region: str = "auto"
    s3_bucket: str = "events-images"
    s3_timeout_seconds: int = 15
    max_image_bytes: int = 5 * 1024 * 1024

    default_timezone: str = "UTC"

    @field_validator("access_token_secret", "refresh_token_secret", "reset_token_secret")
    @classmethod
    def _strong_secret(cls, value: str) -> str:
        if value == PLACEHOLDER_SECRET:
            raise ValueError("Replace the placeholder token secret (openssl rand -hex 32)")
        if len(value) < MIN_SECRET_LENGTH:
            raise ValueError(f"Token secrets need at least {MIN_SECRET_LENGTH} characters")
        return value

    @field_validator("cors_origins")
    @classmethod
    def _explicit_origins(cls, value: list[str]) -> list[str]:
        # Credentials are allowed, so the browser would refuse a wildcard anyway
        if "*" in value:
            raise ValueError("CORS_ORIGINS must list explicit origins, not '*'")
        return value

    @model_validator(mode="after")
    def _check_cross_field(self) -> Self:
        secrets = {self.access_token_secret, self.refresh_token_secret, self.reset_token_secret}
        if len(secrets) != 3:
            raise ValueError(
                "ACCESS_TOKEN_SECRET, REFRESH_TOKEN_SECRET and RESET_TOKEN_SECRET must differ"
            )

        host = urlparse(self.app_url).hostname or ""
        if not any(
            host == domain or host.endswith(f".{domain}")
            for domain in self.allowed_app_url_domains
        ):
            raise ValueError(f"APP_URL host '{host}' is not in ALLOWED_APP_URL_DOMAINS")
        return self

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"


@lru_cache
def get_settings() -> Settings:
    return Settings()
