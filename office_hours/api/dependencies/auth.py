# office_hours/api/dependencies/auth.py
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from office_hours.core.errors import UnauthorizedError
from office_hours.db.session import get_db
from office_hours.models.user import User
from office_hours.schemas.user import Role, UserStatus
from office_hours.services.store import ScheduleStore


async def get_store(db: AsyncSession = Depends(get_db)) -> ScheduleStore:
    """
    Request-scoped storage collaborator over the request's DB session.
    """
    return ScheduleStore(db)


async def get_current_user(
    x_principal: str | None = Header(
        default=None,
        alias="X-Principal",
        description=(
            "Authenticated principal of the caller, set by the upstream "
            "identity provider / gateway."
        ),
    ),
    store: ScheduleStore = Depends(get_store),
) -> User:
    """
    Resolve the acting user.

    Rules
    -----
    - Missing header                   -> 401
    - Principal not whitelisted        -> 401
    - Whitelisted but DISABLED         -> 401
    """
    if not x_principal:
        raise UnauthorizedError("Missing X-Principal header.")

    user = await store.get_user(x_principal)
    if user is None or user.status != UserStatus.ACTIVE.value:
        raise UnauthorizedError("Caller is not an authorized user.")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    Same as `get_current_user`, additionally requiring the ADMIN role.
    """
    if user.role != Role.ADMIN.value:
        raise UnauthorizedError("Administrator role required.")
    return user
