# db.py
from __future__ import annotations

from urllib.parse import quote_plus
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, declarative_base

# Optional but useful: fail fast if the ODBC driver is not installed
try:
    import pyodbc  # ensure available in the venv
    _AVAILABLE_DRIVERS = {d.strip() for d in pyodbc.drivers()}
except Exception:
    _AVAILABLE_DRIVERS = set()

from config import settings


def _build_odbc_connection_string() -> str:
    """
    Returns a full ODBC connection string suitable for pyodbc.
    We will wrap this with quote_plus and feed it via odbc_connect.
    """
    driver = settings.DB_DRIVER
    encrypt = "yes" if settings.DB_ENCRYPT else "no"
    trust = "yes" if settings.DB_TRUST_SERVER_CERT else "no"

    if _AVAILABLE_DRIVERS and driver not in _AVAILABLE_DRIVERS:
        raise RuntimeError(
            f"Configured DB_DRIVER '{driver}' not found. "
            f"Installed drivers: {sorted(_AVAILABLE_DRIVERS)}. "
            f"Install the correct Microsoft ODBC Driver (e.g., 18) "
            f"or set DB_DRIVER / DATABASE_URL accordingly."
        )

    # Named instances go in DB_HOST as 'MACHINE\\SQLEXPRESS'
    return (
        f"DRIVER={{{driver}}};"
        f"SERVER={settings.DB_HOST},{settings.DB_PORT};"
        f"DATABASE={settings.DB_NAME};"
        f"UID={settings.DB_USER};PWD={settings.DB_PASSWORD};"
        f"Encrypt={encrypt};"
        f"TrustServerCertificate={trust};"
    )


def build_sqlalchemy_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    # Quote the entire ODBC string; this handles special characters safely
    return "mssql+pyodbc:///?odbc_connect=" + quote_plus(_build_odbc_connection_string())


def make_engine(url: str, **kwargs):
    """Engine factory shared by the app and the test suite."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_recycle", 1800)
    eng = create_engine(url, echo=settings.DB_ENABLE_LOG, future=True, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores foreign keys unless asked per connection
        @event.listens_for(eng, "connect")
        def _fk_on(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return eng


engine = make_engine(build_sqlalchemy_url())

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_db() -> bool:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
