"""Repository helpers for the scheduling matrix read model."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.orm import Session, selectinload

from app.models.entities import (
    Campus,
    Event,
    EventAgendaItem,
    EventAssignment,
    EventCampus,
    EventPosition,
    EventStatus,
    EventType,
    Ministry,
    Profile,
    VolunteerUnavailability,
)


class MatrixRepository:
    """Upstream fetches feeding the matrix engine, scoped to one church."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- Profiles ----------
    def get_profile_by_email(self, email: str) -> Profile | None:
        return self.db.scalar(select(Profile).where(Profile.email == email))

    # ---------- Events ----------
    def list_matrix_events(
        self,
        church_id: UUID,
        *,
        starting_from: datetime,
        limit: int,
        event_type: EventType | None = None,
    ) -> list[Event]:
        conditions = [
            Event.church_id == church_id,
            Event.status == EventStatus.PUBLISHED,
            Event.start_time >= starting_from,
        ]
        if event_type is not None:
            conditions.append(Event.event_type == event_type)

        return self.db.scalars(
            select(Event)
            .where(and_(*conditions))
            .options(
                selectinload(Event.event_campuses).selectinload(EventCampus.campus),
                selectinload(Event.event_agenda_items).options(
                    selectinload(EventAgendaItem.song),
                    selectinload(EventAgendaItem.leader),
                    selectinload(EventAgendaItem.ministry),
                ),
                selectinload(Event.event_positions).options(
                    selectinload(EventPosition.ministry),
                    selectinload(EventPosition.event_assignments).selectinload(EventAssignment.profile),
                ),
            )
            .order_by(Event.start_time.asc(), Event.id.asc())
            .limit(limit)
        ).all()

    # ---------- Unavailability ----------
    def list_unavailability(self, church_id: UUID) -> list[VolunteerUnavailability]:
        return self.db.scalars(
            select(VolunteerUnavailability)
            .where(VolunteerUnavailability.church_id == church_id)
            .options(selectinload(VolunteerUnavailability.profile))
            .order_by(
                VolunteerUnavailability.start_date.asc(),
                VolunteerUnavailability.profile_id.asc(),
            )
        ).all()

    # ---------- Filter lookups ----------
    def list_ministries(self, church_id: UUID) -> list[Ministry]:
        return self.db.scalars(
            select(Ministry).where(Ministry.church_id == church_id).order_by(Ministry.name.asc())
        ).all()

    def list_campuses(self, church_id: UUID) -> list[Campus]:
        return self.db.scalars(
            select(Campus).where(Campus.church_id == church_id).order_by(Campus.name.asc())
        ).all()
