from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, Optional

from faculty_portal.core.database import get_db
from faculty_portal.core.exceptions import AuthorizationError, InvalidTokenError, MissingTokenError
from faculty_portal.core.logging_config import set_user_id
from faculty_portal.core.security import decode_token
from faculty_portal.models.user import User, UserRole

# auto_error=False so a missing header reaches us and gets the portal's 401 body
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Resolve the bearer token to a User; every failure is a 401"""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    payload = decode_token(credentials.credentials)

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise InvalidTokenError()

    user = await db.get(User, user_id)
    if user is None:
        # Token outlived its user
        raise InvalidTokenError()

    set_user_id(user.id)
    request.state.user_id = user.id
    return user


def require_roles(*roles: UserRole, message: str = "Access denied") -> Callable:
    """
    Dependency factory restricting a route to the given roles.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.PL))])
    """
    allowed = set(roles)

    async def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise AuthorizationError(message)
        return current_user

    return _check


get_current_pl = require_roles(UserRole.PL, message="Only Program Leaders can perform this action")
