"""API I/O schemas.

Flag fields are optional on every read schema; routes serialise with
``response_model_exclude_unset`` so a flag the caller may not see is left
out of the payload entirely rather than sent as null.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class RecordId(BaseModel):
    id: str


class RecordListItem(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    private: Optional[bool] = None
    published: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)


class ProjectListItem(RecordListItem):
    categories: Any = None
    location: Any = None


class IndicatorListItem(RecordListItem):
    pass


class RecordDetail(BaseModel):
    id: str
    name: str
    owner: str
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
    private: Optional[bool] = None
    published: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    ok: bool = True
    service: str = "meridian"
