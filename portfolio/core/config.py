import os
from dataclasses import dataclass
from typing import List
from urllib.parse import urlparse

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Provides validated access to the portfolio backend endpoints.
    """

    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3000/api")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")

    CORS_ALLOWED_ORIGINS_ENV: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")

    @classmethod
    def projects_url(cls) -> str:
        return f"{cls.API_BASE_URL.rstrip('/')}/projects?featured=true"

    @classmethod
    def contact_url(cls) -> str:
        return f"{cls.API_BASE_URL.rstrip('/')}/contact"

    @classmethod
    def allowed_origins(cls, extra_origins: List[str] | None = None) -> List[str]:
        env_origins = [o.strip() for o in cls.CORS_ALLOWED_ORIGINS_ENV.split(",") if o.strip()]
        merged = list(env_origins)
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @classmethod
    def validate(cls) -> None:
        if not cls.API_BASE_URL:
            raise ValueError("API_BASE_URL environment variable is required")
        parsed = urlparse(cls.API_BASE_URL)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"API_BASE_URL must be an absolute http(s) URL, got {cls.API_BASE_URL!r}")
