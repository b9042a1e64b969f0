"""Scheduling matrix read endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import VIEW_EVENT_ROLES, RequestUserContext, require_roles
from app.db.dependencies import get_db_session
from app.matrix import serialize_matrix_data
from app.models.entities import EventType
from app.services.matrix_service import MatrixQuery, MatrixService

router = APIRouter(prefix="/matrix", tags=["matrix"])

require_event_viewer = require_roles(*VIEW_EVENT_ROLES)


def _matrix_service(db: Session) -> MatrixService:
    return MatrixService(db)


@router.get("")
def get_matrix(
    campus_id: UUID | None = None,
    ministry_ids: list[UUID] | None = Query(default=None),
    event_type: EventType | None = None,
    limit: int | None = Query(default=None, ge=1),
    context: RequestUserContext = Depends(require_event_viewer),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _matrix_service(db)
    data = service.build_matrix(
        context=context,
        query=MatrixQuery(
            campus_id=campus_id,
            ministry_ids=ministry_ids or [],
            event_type=event_type,
            limit=limit,
        ),
    )
    return serialize_matrix_data(data)


@router.get("/ministries")
def list_matrix_ministries(
    context: RequestUserContext = Depends(require_event_viewer),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    return {"items": _matrix_service(db).list_ministries(context=context)}


@router.get("/campuses")
def list_matrix_campuses(
    context: RequestUserContext = Depends(require_event_viewer),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    return {"items": _matrix_service(db).list_campuses(context=context)}
