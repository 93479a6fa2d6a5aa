"""
Database engine, session factory and declarative base.
"""
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from core.config import settings


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


engine = create_engine(
    settings.DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
    connect_args={"connect_timeout": settings.DB_POOL_TIMEOUT},
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency providing one database session per request.

    The session is always closed once the response has been sent.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_database_time(db: Session):
    """Return the database server clock; raises if the database is unreachable."""
    return db.execute(text("SELECT NOW()")).scalar_one()
