"""
Configuration for the Movie Catalog API.

All settings come from environment variables and fall back to
development defaults so the app runs out of the box.
"""
import os
from typing import List

from pydantic import BaseModel, Field

DEFAULT_JWT_SECRET = "demo-jwt-secret"
DEFAULT_API_TOKEN = "demo-supersecret-token"
DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 3600
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/database.sqlite"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings(BaseModel):
    """Application settings."""
    jwt_secret: str = DEFAULT_JWT_SECRET
    api_token: str = DEFAULT_API_TOKEN
    access_token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, gt=0)
    database_url: str = DEFAULT_DATABASE_URL
    api_prefix: str = "/api"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    seed_on_startup: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            api_token=os.getenv("API_TOKEN") or DEFAULT_API_TOKEN,
            access_token_ttl_seconds=int(
                os.getenv("ACCESS_TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)
            ),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            api_prefix=os.getenv("API_PREFIX", "/api"),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", 12)),
            seed_on_startup=_env_bool("SEED_ON_STARTUP"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
