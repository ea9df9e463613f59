"""SQLAlchemy implementation of KeyValueRepository."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockscope.core.exceptions import PersistenceError
from stockscope.repositories.sqlalchemy.orm_models import KeyValueORM

logger = logging.getLogger(__name__)


class SqlAlchemyKeyValueRepository:
    """SQLAlchemy-backed key-value store."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        try:
            orm_row = self._db.get(KeyValueORM, key)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e
        return orm_row.value if orm_row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value under key."""
        try:
            orm_row = self._db.get(KeyValueORM, key)
            if orm_row:
                orm_row.value = value
            else:
                self._db.add(KeyValueORM(key=key, value=value))
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

    def delete(self, key: str) -> bool:
        """Delete key; return True if it existed."""
        try:
            deleted = self._db.query(KeyValueORM).filter(KeyValueORM.key == key).delete()
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise PersistenceError(f"Failed to delete '{key}': {e}") from e
        return deleted > 0

    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        try:
            rows = self._db.query(KeyValueORM.key).order_by(KeyValueORM.key).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list keys: {e}") from e
        return [row.key for row in rows]

    def items(self) -> dict[str, str]:
        """Return every stored key with its value."""
        try:
            rows = self._db.query(KeyValueORM).order_by(KeyValueORM.key).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read storage: {e}") from e
        return {row.key: row.value for row in rows}
