"""Configuration settings for the Users API."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./users.db")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Password hashing
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    ACCESS_LOG: bool = os.getenv("ACCESS_LOG", "true").lower() == "true"

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if not 4 <= self.BCRYPT_ROUNDS <= 31:
            errors.append(f"BCRYPT_ROUNDS={self.BCRYPT_ROUNDS} is outside 4..31 - bcrypt will reject it")
        elif self.BCRYPT_ROUNDS < 10 and self.APP_ENV == "production":
            errors.append(f"BCRYPT_ROUNDS={self.BCRYPT_ROUNDS} is low for production")
        if self.APP_ENV == "production" and self.DATABASE_URL.startswith("sqlite"):
            errors.append("DATABASE_URL points at SQLite in production")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
