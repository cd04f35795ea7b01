"""Record storage shared by projects and indicators."""
from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..domain.models import RecordModel, RecordTable, utcnow
from ..domain.policy import ListScope

logger = logging.getLogger("meridian.records")


class StorageFailure(Exception):
    """A persistence call failed; `action` is one of add/find/update/delete."""

    def __init__(self, action: str, table: str) -> None:
        super().__init__(f"{action} failed on {table}")
        self.action = action
        self.table = table


class RecordStore:
    """Storage for one record kind, one SQL statement per call."""

    def __init__(self, session: Session, model: RecordModel) -> None:
        self.session = session
        self.model = model

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("storage failure: %s on %s", action, self.table)
            self.session.rollback()
            raise StorageFailure(action, self.table) from exc

    def list(self, scope: ListScope) -> List[RecordTable]:
        stmt = select(self.model).order_by(self.model.created_at.desc())
        for column, value in scope.where.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        with self._guard("find"):
            return list(self.session.exec(stmt).all())

    def get_by_id(self, record_id: str) -> Optional[RecordTable]:
        with self._guard("find"):
            return self.session.get(self.model, record_id)

    def insert(
        self,
        *,
        name: str,
        owner: str,
        data: Dict[str, Any],
        private: bool = False,
        published: bool = False,
    ) -> str:
        now = utcnow()
        record = self.model(
            name=name,
            owner=owner,
            data=data,
            private=private,
            published=published,
            created_at=now,
            updated_at=now,
        )
        with self._guard("add"):
            self.session.add(record)
            self.session.flush()
        return record.id

    def update_by_id(
        self,
        record_id: str,
        *,
        name: str,
        data: Dict[str, Any],
        private: bool = False,
        published: bool = False,
    ) -> Optional[str]:
        """Replace name, flags and data; `owner` and `created_at` stay as they are."""
        with self._guard("update"):
            record = self.session.get(self.model, record_id)
            if record is None:
                return None
            record.name = name
            record.private = private
            record.published = published
            record.data = data
            record.updated_at = utcnow()
            self.session.add(record)
            self.session.flush()
        return record_id

    def delete_by_id(self, record_id: str) -> str:
        with self._guard("delete"):
            record = self.session.get(self.model, record_id)
            if record is not None:
                self.session.delete(record)
                self.session.flush()
        return record_id
