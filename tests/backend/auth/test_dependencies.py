from types import SimpleNamespace

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from backend.auth import jwt_handler
from backend.auth.dependencies import (
    Caller,
    admin_only,
    any_member,
    get_caller,
    is_author,
    is_author_or_moderator,
    require_roles,
)
from backend.core import config
from backend.core.errors import Forbidden, Unauthenticated
from backend.models.user import Role


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def test_get_caller_reads_id_and_role_from_token() -> None:
    token = jwt_handler.create_access_token(7, 'ADMIN')

    caller = get_caller(credentials=_credentials(token))

    assert caller == Caller(id=7, role=Role.ADMIN)
    assert caller.is_admin


def test_get_caller_rejects_missing_credentials() -> None:
    with pytest.raises(Unauthenticated):
        get_caller(credentials=None)


def test_get_caller_rejects_token_signed_with_another_key() -> None:
    token = jwt.encode({'sub': '7', 'role': 'ADMIN'}, 'another-secret', algorithm=config.JWT_ALGORITHM)

    with pytest.raises(Unauthenticated) as exception_info:
        get_caller(credentials=_credentials(token))

    assert exception_info.value.message == 'Invalid token'


def test_get_caller_rejects_expired_token() -> None:
    token = jwt_handler.create_access_token(7, 'STUDENT', expires_minutes=-5)

    with pytest.raises(Unauthenticated):
        get_caller(credentials=_credentials(token))


@pytest.mark.parametrize(
    'claims',
    [
        {'role': 'STUDENT'},
        {'sub': '7'},
        {'sub': '7', 'role': 'COACH'},
        {'sub': 'seven', 'role': 'STUDENT'},
    ],
)
def test_get_caller_rejects_incomplete_claims(claims: dict) -> None:
    token = jwt.encode(claims, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)

    with pytest.raises(Unauthenticated) as exception_info:
        get_caller(credentials=_credentials(token))

    assert exception_info.value.message == 'Invalid token claims'


def test_admin_only_rejects_student() -> None:
    with pytest.raises(Forbidden):
        admin_only(caller=Caller(id=1, role=Role.STUDENT))


def test_any_member_accepts_both_roles() -> None:
    student = Caller(id=1, role=Role.STUDENT)
    admin = Caller(id=2, role=Role.ADMIN)

    assert any_member(caller=student) is student
    assert any_member(caller=admin) is admin


def test_require_roles_accepts_only_listed_roles() -> None:
    students_only = require_roles(Role.STUDENT)

    assert students_only(caller=Caller(id=1, role=Role.STUDENT)).id == 1
    with pytest.raises(Forbidden):
        students_only(caller=Caller(id=2, role=Role.ADMIN))


def test_ownership_predicates() -> None:
    post = SimpleNamespace(user_id=5)
    author = Caller(id=5, role=Role.STUDENT)
    stranger = Caller(id=6, role=Role.STUDENT)
    moderator = Caller(id=9, role=Role.ADMIN)

    assert is_author(author, post)
    assert not is_author(stranger, post)
    assert not is_author(moderator, post)
    assert is_author_or_moderator(moderator, post)
    assert not is_author_or_moderator(stranger, post)
