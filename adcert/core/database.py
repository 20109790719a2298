"""Database engine and session management.

The engine and session factory are created once per process and shared by
every request; callers receive sessions through ``get_db``.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from adcert.core.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables. Deployments run Alembic migrations instead."""
    from adcert.models.base import Base
    import adcert.models  # noqa: F401  (registers every table on Base.metadata)

    Base.metadata.create_all(bind=engine)
