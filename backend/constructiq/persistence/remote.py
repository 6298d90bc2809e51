# backend/constructiq/persistence/remote.py
from contextlib import asynccontextmanager, contextmanager
from datetime import date, datetime
from typing import Any, AsyncIterator, Iterator, List, Optional

from sqlalchemy import Date, DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..errors import PersistenceFailure
from ..registry import get_collection
from ..utils.logging import db_logger
from ..utils.naming import camel_keys, to_snake
from .base import PersistenceAdapter, RecordData


class RemoteAdapter(PersistenceAdapter):
    """Relational tables with snake_case columns; the tables assign ids"""

    assigns_ids = True

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self._batch_session: Optional[Session] = None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._batch_session is not None:
            try:
                yield self._batch_session
                self._batch_session.flush()
            except SQLAlchemyError as e:
                raise PersistenceFailure(f"Database error: {e}") from e
            return

        db = self.session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            db_logger.error("Database operation failed", extra={"error": str(e)})
            raise PersistenceFailure(f"Database error: {e}") from e
        finally:
            db.close()

    @staticmethod
    def _to_row_values(table: type, fields: RecordData) -> dict:
        """camelCase record fields -> snake_case column values"""
        columns = table.__table__.columns
        values = {}
        for key, value in fields.items():
            column_name = to_snake(key)
            if column_name not in columns:
                continue
            column = columns[column_name]
            if isinstance(value, str) and value == "":
                value = None  # typed columns reject empty strings
            elif isinstance(value, str) and isinstance(column.type, DateTime):
                value = datetime.fromisoformat(value)
            elif isinstance(value, str) and isinstance(column.type, Date):
                value = date.fromisoformat(value)
            values[column_name] = value
        return values

    @staticmethod
    def _to_record(row: Any) -> RecordData:
        """snake_case row -> camelCase record fields"""
        return camel_keys({
            column.name: getattr(row, column.name)
            for column in row.__table__.columns
        })

    async def load(self, collection: str) -> List[RecordData]:
        entry = get_collection(collection)
        order = entry.table.created_at.desc() if entry.newest_first else entry.table.created_at
        with self._session() as db:
            rows = db.query(entry.table).order_by(order).all()
            return [self._to_record(row) for row in rows]

    async def insert(self, collection: str, record: RecordData, prepend: bool = False) -> RecordData:
        table = get_collection(collection).table
        with self._session() as db:
            row = table(**self._to_row_values(table, record))
            db.add(row)
            db.flush()
            db.refresh(row)
            stored = self._to_record(row)

        db_logger.debug("Inserted row", extra={"table": table.__tablename__, "row_id": stored["id"]})
        return stored

    async def update(self, collection: str, record_id: str, fields: RecordData) -> Optional[RecordData]:
        table = get_collection(collection).table
        with self._session() as db:
            row = db.query(table).filter(table.id == record_id).first()
            if row is None:
                return None
            for column_name, value in self._to_row_values(table, fields).items():
                if column_name in ("id", "created_at"):
                    continue
                setattr(row, column_name, value)
            db.flush()
            db.refresh(row)
            return self._to_record(row)

    async def delete(self, collection: str, record_ids: List[str]) -> None:
        if not record_ids:
            return
        table = get_collection(collection).table
        with self._session() as db:
            db.query(table).filter(table.id.in_(record_ids)).delete(synchronize_session=False)

    @asynccontextmanager
    async def batch(self) -> AsyncIterator[None]:
        if self._batch_session is not None:
            yield
            return

        db = self.session_factory()
        self._batch_session = db
        try:
            yield
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            db_logger.error("Batch transaction failed", extra={"error": str(e)})
            raise PersistenceFailure(f"Database error: {e}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            self._batch_session = None
            db.close()
