"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    REDIS_URL: str
    REDIS_PASSWORD: str | None
    API_TOKENS: list[str]
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    MAX_PAGE_SIZE: int

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
        self.REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None
        # comma separated; an empty allowlist accepts any non-empty token
        self.API_TOKENS = [t.strip() for t in os.getenv("API_TOKENS", "").split(",") if t.strip()]
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "200"))
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and not self.API_TOKENS:
            raise RuntimeError("API_TOKENS must list at least one token in non-dev environments")
        if self.MAX_PAGE_SIZE < 1:
            raise RuntimeError("MAX_PAGE_SIZE must be a positive integer")


settings = Settings()
