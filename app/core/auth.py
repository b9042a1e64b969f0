"""Authentication context extraction and role guard utilities."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.dependencies import get_db_session
from app.models.entities import ProfileRole
from app.repositories.matrix_repository import MatrixRepository

VIEW_EVENT_ROLES = frozenset(
    {ProfileRole.OWNER, ProfileRole.ADMIN, ProfileRole.LEADER, ProfileRole.VOLUNTEER}
)


@dataclass(frozen=True)
class RequestUserContext:
    """Authenticated request actor resolved from headers and the profile table."""

    profile_id: UUID
    church_id: UUID
    email: str
    display_name: str
    role: ProfileRole


def _resolve_email(x_user_email: str | None) -> str:
    if x_user_email and x_user_email.strip():
        return x_user_email.strip().lower()

    settings = get_settings()
    if settings.auth_allow_dev_principal:
        return settings.auth_dev_email.strip().lower()

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing identity header. Expected X-USER-EMAIL or enable development principal fallback.",
    )


def get_current_user_context(
    x_user_email: str | None = Header(default=None, alias="X-USER-EMAIL"),
    db: Session = Depends(get_db_session),
) -> RequestUserContext:
    """Resolve the church profile behind the trusted identity header."""

    email = _resolve_email(x_user_email)
    profile = MatrixRepository(db).get_profile_by_email(email)
    if profile is None or not profile.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No active church profile for this identity.",
        )

    return RequestUserContext(
        profile_id=profile.id,
        church_id=profile.church_id,
        email=profile.email,
        display_name=f"{profile.first_name} {profile.last_name}".strip(),
        role=profile.role,
    )


def has_role(context: RequestUserContext, allowed_roles: frozenset[ProfileRole] | set[ProfileRole]) -> bool:
    return context.role in allowed_roles


def require_roles(*roles: ProfileRole):
    """Dependency factory requiring one of the provided roles."""

    allowed = frozenset(roles)

    def dependency(context: RequestUserContext = Depends(get_current_user_context)) -> RequestUserContext:
        if not has_role(context, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role permissions for this operation.",
            )
        return context

    return dependency
