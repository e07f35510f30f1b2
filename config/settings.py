from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Domain Offers"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev

    # Ledger backing: "kv" = flat key-value namespace, "actor" = one actor per domain
    LEDGER_BACKEND: Literal["kv", "actor"] = "kv"
    # Where the chosen backing keeps its bytes; "memory" is process-local (dev/tests)
    STORAGE_BACKEND: Literal["redis", "memory"] = "redis"

    # Redis (defaults match a local redis-server)
    REDIS_URL: str = "redis://localhost:6379/0"

    # Secrets: no defaults, MUST be set in .env
    API_AUTH_TOKEN: str
    ADMIN_PASSWORD: str
    ADMIN_SESSION_SECRET: str
    ADMIN_SESSION_ALGORITHM: str = "HS256"
    ADMIN_SESSION_MAX_AGE_SECONDS: int = 3600
    SECURE_COOKIES: bool = True

    # CAPTCHA (Cloudflare Turnstile)
    CAPTCHA_SECRET_KEY: str
    CAPTCHA_VERIFY_URL: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
    CAPTCHA_TIMEOUT_SECONDS: float = 10.0

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = []

    # Used when a request carries no ?domain= parameter
    DEFAULT_DOMAIN: str | None = None


def get_settings() -> Settings:
    """Build settings from the environment. Called once, at app startup."""
    return Settings()  # type: ignore[call-arg]
