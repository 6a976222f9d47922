"""Database module for the Asset Warehouse API."""

from app.db.base import Base
from app.db.session import create_engine, create_sessionmaker, get_db

__all__ = ["Base", "create_engine", "create_sessionmaker", "get_db"]
