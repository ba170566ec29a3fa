# config.py
from typing import Optional
import os
from dotenv import load_dotenv

load_dotenv()


def _to_bool(v: Optional[str], default: bool) -> bool:
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y"}


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "GD Solutions - API de Gestão de Funcionários")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = _to_bool(os.getenv("DEBUG"), False)
    PORT: int = int(os.getenv("PORT", "5000"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "").strip().upper()
    LOG_JSON: bool = _to_bool(os.getenv("LOG_JSON"), ENVIRONMENT.lower() == "production")

    # Full SQLAlchemy URL wins over the DB_* pieces below
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    DB_DRIVER: str = os.getenv("DB_DRIVER", "ODBC Driver 18 for SQL Server")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "1433"))
    DB_USER: str = os.getenv("DB_USER", "")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DB_NAME: str = os.getenv("DB_NAME", "")
    DB_ENCRYPT: bool = _to_bool(os.getenv("DB_ENCRYPT"), True)
    DB_TRUST_SERVER_CERT: bool = _to_bool(os.getenv("DB_TRUST_SERVER_CERT"), True)
    DB_ENABLE_LOG: bool = _to_bool(os.getenv("DB_ENABLE_LOG"), False)
    DB_CREATE_TABLES: bool = _to_bool(os.getenv("DB_CREATE_TABLES"), True)

    CORS_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "*").split(",")
        if o.strip()
    ]

    DEFAULT_API_VERSION: str = os.getenv("DEFAULT_API_VERSION", "1.0")
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

settings = Settings()
