"""Database engine (connection pool) and per-request sessions."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, pool
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from users_api.config import get_settings


def make_engine(url: str, echo: bool = False, pooled: bool = True) -> Engine:
    """Create an engine for url. SQLite connections may be shared across threads."""
    options: dict = {"echo": echo}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    if not pooled:
        options["poolclass"] = pool.NullPool
    return create_engine(url, **options)


settings = get_settings()
engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request; uncommitted work is rolled back on close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
