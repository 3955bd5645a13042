"""
Sketch Embedder configuration: all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import os
from pathlib import Path

_ROOT = Path(__file__).parent.parent


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    HOST: str = os.environ.get("HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("PORT", "3000"))

    # Requests
    MAX_BODY_BYTES: int = int(os.environ.get("MAX_BODY_BYTES", str(5 * 1024 * 1024)))
    CORS_ORIGINS: list[str] = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Static content
    DEMO_DIR: Path = Path(os.environ.get("DEMO_DIR", str(Path(__file__).parent / "demos")))
    FRONTEND_DIR: Path = Path(os.environ.get("FRONTEND_DIR", str(_ROOT / "frontend")))

    @property
    def PUBLIC_URL(self) -> str:
        url = os.environ.get("PUBLIC_URL")
        if url:
            return url.rstrip("/")
        return "http://localhost:3000" if self.ENVIRONMENT == "development" else "https://sketches.example.com"

    @property
    def EDITOR_URL(self) -> str:
        url = os.environ.get("EDITOR_URL")
        if url:
            return url.rstrip("/")
        return ""


# Singleton instance
settings = Settings()

if settings.MAX_BODY_BYTES <= 0:
    raise RuntimeError("MAX_BODY_BYTES must be positive")
