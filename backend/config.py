# backend/config.py
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CORS_ALLOW_ORIGINS, SESSION_COOKIE_NAME

DEFAULT_JWT_SECRET = "dev-secret-please-change"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Security / JWT ---
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days, matches the session cookie
    session_cookie_name: str = SESSION_COOKIE_NAME
    session_cookie_secure: bool = False

    # Lets the dashboard obtain a session for any role without signing in.
    allow_role_switching: bool = False

    # --- HTTP ---
    cors_origins: List[str] = list(CORS_ALLOW_ORIGINS)
    enable_hsts: bool = True
    content_security_policy: Optional[str] = None

    # --- Logging ---
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    log_format: Literal["json", "plain"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
