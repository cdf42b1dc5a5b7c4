"""Generic CRUD repository shared by every resource.

Each public write is a single transaction: it commits once at the end, and
any backing-store failure rolls the whole operation back before surfacing as
an ``Internal`` error.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import Internal, NotFound, PortalError

ModelT = TypeVar('ModelT')

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return 'UNSET'


UNSET: Any = _Unset()


class Repository(Generic[ModelT]):
    model: type
    label = 'Record'

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            error = self.translate_error(exc)
            if isinstance(error, Internal):
                logger.exception('%s write failed', self.label)
            raise error from exc
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def reading(self):
        try:
            yield self.db
        except SQLAlchemyError as exc:
            logger.exception('%s read failed', self.label)
            raise Internal() from exc

    def translate_error(self, exc: SQLAlchemyError) -> PortalError:
        return Internal()

    def not_found(self) -> NotFound:
        return NotFound(f'{self.label} not found')

    def require(self, record_id: int) -> ModelT:
        record = self.db.get(self.model, record_id)
        if record is None:
            raise self.not_found()
        return record

    def list(
        self,
        *criteria,
        order_by: Iterable = (),
        limit: int | None = None,
        options: Iterable = (),
    ) -> Sequence[ModelT]:
        with self.reading():
            query = self.db.query(self.model).options(*options).filter(*criteria)
            query = query.order_by(*order_by)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def count(self, *criteria) -> int:
        with self.reading():
            return self.db.query(func.count(self.model.id)).filter(*criteria).scalar() or 0

    def get(self, record_id: int) -> ModelT:
        with self.reading():
            return self.require(record_id)

    def create(self, **fields) -> ModelT:
        with self.transaction():
            record = self.model(**fields)
            self.db.add(record)
        self.db.refresh(record)
        return record

    def apply(self, record: ModelT, fields: dict) -> None:
        columns = self.model.__table__.columns
        for name, value in fields.items():
            # Required columns keep their value when the caller sends null.
            if value is None and not columns[name].nullable:
                continue
            setattr(record, name, value)

    def update(self, record_id: int, **fields) -> ModelT:
        with self.transaction():
            record = self.require(record_id)
            self.apply(record, fields)
        self.db.refresh(record)
        return record

    def before_delete(self, record: ModelT) -> None:
        """Clear rows that reference ``record``; runs in the delete's transaction."""

    def delete(self, record_id: int) -> None:
        with self.transaction():
            record = self.require(record_id)
            self.before_delete(record)
            self.db.delete(record)
