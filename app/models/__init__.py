"""ORM model package."""

from app.models.entities import (
    AssignmentStatus,
    Campus,
    Church,
    Event,
    EventAgendaItem,
    EventAssignment,
    EventCampus,
    EventPosition,
    EventStatus,
    EventType,
    Ministry,
    Profile,
    ProfileRole,
    Song,
    VolunteerUnavailability,
)

__all__ = [
    "AssignmentStatus",
    "Campus",
    "Church",
    "Event",
    "EventAgendaItem",
    "EventAssignment",
    "EventCampus",
    "EventPosition",
    "EventStatus",
    "EventType",
    "Ministry",
    "Profile",
    "ProfileRole",
    "Song",
    "VolunteerUnavailability",
]
