"""
Database ORM Models
SQLAlchemy ORM models and session helpers.
"""

from .models import Base, MerchantStore
from .session import get_engine, get_session_factory, init_db, reset_engine

__all__ = [
    "Base",
    "MerchantStore",
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_engine",
]
