"""
Configuration settings for JewelBox
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Resolve .env relative to the project root so settings load regardless of cwd.
_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _PACKAGE_DIR.parent
_ENV_CANDIDATES = [
    _PROJECT_ROOT / ".env",
    _PACKAGE_DIR / ".env",
]
_ENV_FILE = [str(p) for p in _ENV_CANDIDATES if p.is_file()]

# Load .env into os.environ so the os.getenv defaults below see it too.
for p in _ENV_CANDIDATES:
    if p.is_file():
        load_dotenv(p, override=False)
        break


class Settings(BaseSettings):
    """Application settings"""

    # App
    APP_NAME: str = "JewelBox"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    BUSINESS_NAME: str = os.getenv("BUSINESS_NAME", "JewelBox")

    # Database (Supabase Postgres)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    SUPABASE_DB_PASSWORD: str = os.getenv("SUPABASE_DB_PASSWORD", "")
    SUPABASE_DB_HOST: str = os.getenv("SUPABASE_DB_HOST", "localhost")
    SUPABASE_DB_NAME: str = os.getenv("SUPABASE_DB_NAME", "postgres")
    SUPABASE_DB_PORT: int = int(os.getenv("SUPABASE_DB_PORT", "5432"))
    SUPABASE_DB_USER: str = os.getenv("SUPABASE_DB_USER", "postgres")

    # Supabase API (storage) and auth
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")  # server-side only
    # Verifies the access tokens issued by Supabase Auth (Project Settings -> API -> JWT Secret)
    SUPABASE_JWT_SECRET: str = os.getenv("SUPABASE_JWT_SECRET", "").strip()
    JWT_ALGORITHM: str = "HS256"

    # Storage: public bucket for inventory photos
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "images")
    MAX_IMAGE_BYTES: int = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))

    # Document numbering
    TAG_PREFIX: str = os.getenv("TAG_PREFIX", "T")
    INVOICE_PREFIX: str = os.getenv("INVOICE_PREFIX", "INV")

    @property
    def database_connection_string(self) -> str:
        """Build database connection string"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg://{self.SUPABASE_DB_USER}:{self.SUPABASE_DB_PASSWORD}"
            f"@{self.SUPABASE_DB_HOST}:{self.SUPABASE_DB_PORT}/{self.SUPABASE_DB_NAME}"
        )

    # CORS - comma-separated string
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS origins as a list, deduplicated in order."""
        origins = [o.strip() for o in (self.CORS_ORIGINS or "").split(",") if o.strip()]
        return list(dict.fromkeys(origins))

    class Config:
        env_file = _ENV_FILE if _ENV_FILE else [".env"]
        case_sensitive = True
        extra = "ignore"


settings = Settings()
