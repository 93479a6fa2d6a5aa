"""Core module containing configuration and database setup."""
from core.config import settings
from core.database import Base, get_db, engine, SessionLocal

__all__ = ["settings", "Base", "get_db", "engine", "SessionLocal"]
