"""Environment-driven configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./meridian.db"
    # base64 encoded, as issued by the identity provider
    auth_secret: str = ""
    auth_audience: Optional[str] = None
    auth_algorithms: Tuple[str, ...] = ("HS256",)
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            auth_secret=os.getenv("AUTH_SECRET", ""),
            auth_audience=os.getenv("AUTH_AUDIENCE") or None,
            auth_algorithms=_split(os.getenv("AUTH_ALGORITHMS", "HS256")) or ("HS256",),
            cors_origins=_split(os.getenv("CORS_ORIGINS", "*")) or ("*",),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, also usable as a FastAPI dependency."""
    return Settings.from_env()
