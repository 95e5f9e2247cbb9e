from bakery.database.base import Base, TimestampMixin
from bakery.database.engine import Database, build_engine
from bakery.database.session import commit_or_conflict, get_db

__all__ = ["Base", "Database", "TimestampMixin", "build_engine", "commit_or_conflict", "get_db"]
