"""CRUD routes shared by every record collection.

Each handler asks the policy first, performs exactly one storage call, and
then shapes the response to the flag fields the verdict exposes.
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlmodel import Session

from ..deps import db_session, optional_caller, require_caller
from ..domain.models import RecordModel, RecordTable
from ..domain.policy import (
    CallerIdentity,
    can_create,
    can_delete,
    can_read,
    can_update,
    list_scope,
)
from ..domain.schemas import RecordDetail, RecordId, RecordListItem
from ..services.access import AccessEnforcer
from ..services.records import RecordStore

Projection = Callable[[RecordTable], Dict[str, Any]]

NOT_FOUND_DETAIL = "Record not found"


def base_projection(record: RecordTable) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


def detail_projection(record: RecordTable) -> Dict[str, Any]:
    return {**base_projection(record), "owner": record.owner, "data": record.data}


def flag_values(record: RecordTable, fields: Iterable[str]) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in fields}


def _flags_from(payload: Dict[str, Any]) -> Dict[str, bool]:
    return {
        "private": bool(payload.get("private") or False),
        "published": bool(payload.get("published") or False),
    }


def build_router(
    model: RecordModel,
    list_item: Type[RecordListItem],
    projection: Projection = base_projection,
) -> APIRouter:
    router = APIRouter()
    access = AccessEnforcer(model.__tablename__)

    def get_store(session: Session = Depends(db_session)) -> RecordStore:
        return RecordStore(session, model)

    @router.get("", response_model=List[list_item], response_model_exclude_unset=True)
    def list_records(
        caller: CallerIdentity = Depends(optional_caller),
        store: RecordStore = Depends(get_store),
    ):
        scope = list_scope(caller)
        return [
            list_item(**projection(record), **flag_values(record, scope.flag_fields))
            for record in store.list(scope)
        ]

    @router.post("", response_model=RecordId)
    def create_record(
        payload: Optional[Dict[str, Any]] = Body(None),
        caller: CallerIdentity = Depends(require_caller),
        store: RecordStore = Depends(get_store),
    ):
        access.enforce(caller, "create", can_create(caller, payload))
        new_id = store.insert(
            name=payload["name"],
            owner=caller.subject,
            data=payload,
            **_flags_from(payload),
        )
        return RecordId(id=new_id)

    @router.get(
        "/{record_id}",
        response_model=RecordDetail,
        response_model_exclude_unset=True,
    )
    def get_record(
        record_id: str,
        caller: CallerIdentity = Depends(optional_caller),
        store: RecordStore = Depends(get_store),
    ):
        record = store.get_by_id(record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
        verdict = access.enforce(
            caller, "read", can_read(caller, record.private, record.published)
        )
        return RecordDetail(**detail_projection(record), **flag_values(record, verdict.flag_fields))

    @router.put("/{record_id}", response_model=RecordId)
    def update_record(
        record_id: str,
        payload: Optional[Dict[str, Any]] = Body(None),
        caller: CallerIdentity = Depends(require_caller),
        store: RecordStore = Depends(get_store),
    ):
        access.enforce(caller, "update", can_update(caller, payload))
        updated = store.update_by_id(
            record_id,
            name=payload["name"],
            data=payload,
            **_flags_from(payload),
        )
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
        return RecordId(id=updated)

    @router.delete("/{record_id}", response_model=RecordId)
    def delete_record(
        record_id: str,
        caller: CallerIdentity = Depends(require_caller),
        store: RecordStore = Depends(get_store),
    ):
        access.enforce(caller, "delete", can_delete(caller))
        return RecordId(id=store.delete_by_id(record_id))

    return router
