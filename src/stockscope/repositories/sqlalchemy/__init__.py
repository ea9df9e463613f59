"""SQLAlchemy repository implementations."""

from stockscope.repositories.sqlalchemy.kv_repo import SqlAlchemyKeyValueRepository

__all__ = [
    "SqlAlchemyKeyValueRepository",
]
