"""Persistence models for projects and indicators."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Type, Union
from uuid import uuid4

from sqlalchemy import JSON
from sqlmodel import Column, Field as SQLField, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordBase(SQLModel):
    """Columns shared by both record kinds."""

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
    name: str = SQLField(nullable=False)
    owner: str = SQLField(index=True)
    private: bool = SQLField(default=False, nullable=False, index=True)
    published: bool = SQLField(default=False, nullable=False, index=True)
    created_at: datetime = SQLField(default_factory=utcnow, nullable=False, index=True)
    updated_at: datetime = SQLField(default_factory=utcnow, nullable=False)


class Project(RecordBase, table=True):
    __tablename__ = "projects"

    # The request body exactly as the caller sent it.
    data: Dict[str, Any] = SQLField(
        sa_column=Column(JSON, nullable=False, server_default="{}")
    )


class Indicator(RecordBase, table=True):
    __tablename__ = "indicators"

    data: Dict[str, Any] = SQLField(
        sa_column=Column(JSON, nullable=False, server_default="{}")
    )


RecordTable = Union[Project, Indicator]
RecordModel = Type[RecordTable]
