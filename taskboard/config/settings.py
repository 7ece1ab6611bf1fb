# taskboard/config/settings.py
# Application configuration, read from the environment (and .env) at import

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "dev-secret-change-me"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _database_url(raw: str) -> str:
    # Render/Heroku still hand out postgres:// URLs, which SQLAlchemy rejects
    if raw.startswith("postgres://"):
        return "postgresql://" + raw[len("postgres://"):]
    return raw


class Settings:
    """Runtime settings for the API and its launcher"""

    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

    # Database
    DATABASE_URL = _database_url(os.getenv("DATABASE_URL", "sqlite:///./taskboard.db"))
    DB_SSLMODE = os.getenv("DB_SSLMODE", "require")

    # Tokens and passwords
    SECRET_KEY = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

    # HTTP
    CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    RELOAD = os.getenv("RELOAD", "true").lower() == "true"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == "development"

    @classmethod
    def uses_default_secret(cls) -> bool:
        return cls.SECRET_KEY == DEFAULT_SECRET_KEY


settings = Settings
