"""Application service wiring upstream fetches to the scheduling matrix engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth import RequestUserContext
from app.core.config import get_settings
from app.matrix import MatrixData, MatrixFilters, build_matrix_data, load_events, load_unavailability
from app.models.entities import Campus, EventType, Ministry
from app.repositories.matrix_repository import MatrixRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatrixQuery:
    campus_id: UUID | None = None
    ministry_ids: list[UUID] = field(default_factory=list)
    event_type: EventType | None = None
    limit: int | None = None

    def to_filters(self) -> MatrixFilters:
        return MatrixFilters(
            campus_id=self.campus_id,
            ministry_ids=frozenset(self.ministry_ids),
            event_type=self.event_type.value if self.event_type is not None else None,
        )


class MatrixService:
    """Reads the church's upcoming events and builds the scheduling matrix."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = MatrixRepository(db)
        self.settings = get_settings()

    def _effective_limit(self, requested: int | None) -> int:
        if requested is None:
            return self.settings.matrix_default_event_limit
        if requested > self.settings.matrix_max_event_limit:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"limit must not exceed {self.settings.matrix_max_event_limit}.",
            )
        return requested

    @staticmethod
    def serialize_lookup(row: Ministry | Campus) -> dict[str, object]:
        return {"id": str(row.id), "name": row.name, "color": row.color}

    def build_matrix(
        self,
        *,
        context: RequestUserContext,
        query: MatrixQuery,
        now: datetime | None = None,
    ) -> MatrixData:
        limit = self._effective_limit(query.limit)
        starting_from = now or datetime.now(timezone.utc)

        try:
            events = load_events(
                self.repo.list_matrix_events(
                    context.church_id,
                    starting_from=starting_from,
                    limit=limit,
                    event_type=query.event_type,
                )
            )
            windows = load_unavailability(self.repo.list_unavailability(context.church_id))
        except SQLAlchemyError:
            logger.exception("Error fetching matrix events for church %s", context.church_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to load events for matrix",
            ) from None

        data = build_matrix_data(query.to_filters(), events, windows)
        logger.debug(
            "Built matrix for church %s: %d of %d events, %d rows",
            context.church_id,
            len(data.events),
            len(events),
            len(data.rows),
        )
        return data

    def _lookup(
        self,
        fetch: Callable[[UUID], Iterable[Ministry | Campus]],
        *,
        context: RequestUserContext,
        what: str,
    ) -> list[dict[str, object]]:
        try:
            rows: Iterable[Ministry | Campus] = fetch(context.church_id)
        except SQLAlchemyError:
            logger.exception("Error fetching %s for church %s", what, context.church_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to load {what}",
            ) from None
        return [self.serialize_lookup(row) for row in rows]

    def list_ministries(self, *, context: RequestUserContext) -> list[dict[str, object]]:
        return self._lookup(self.repo.list_ministries, context=context, what="ministries")

    def list_campuses(self, *, context: RequestUserContext) -> list[dict[str, object]]:
        return self._lookup(self.repo.list_campuses, context=context, what="campuses")
