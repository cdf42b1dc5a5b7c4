from dataclasses import dataclass

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth import jwt_handler
from backend.core.errors import Forbidden, Unauthenticated
from backend.models.user import Role

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity of the user making the request, taken from the bearer token claims."""

    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def caller_from_token(token: str) -> Caller:
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise Unauthenticated('Invalid token') from exc

    try:
        return Caller(id=int(payload["sub"]), role=Role(payload["role"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise Unauthenticated('Invalid token claims') from exc


def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Caller:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return caller_from_token(credentials.credentials)


def require_roles(*roles: Role):
    allowed = frozenset(roles)

    def check_role(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role not in allowed:
            raise Forbidden()
        return caller

    return check_role


admin_only = require_roles(Role.ADMIN)
any_member = require_roles(Role.ADMIN, Role.STUDENT)


def is_author(caller: Caller, post) -> bool:
    return post.user_id == caller.id


def is_author_or_moderator(caller: Caller, post) -> bool:
    return caller.is_admin or is_author(caller, post)
