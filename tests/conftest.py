import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.auth.jwt_handler import create_access_token  # noqa: E402
from backend.database import Base, get_db, init_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models.user import Role, User  # noqa: E402


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name: str, role: Role = Role.STUDENT, **fields) -> User:
        email = fields.pop('email', f"{name.lower().replace(' ', '.')}@numl.edu.pk")
        user = User(name=name, email=email, hashed_password='not-a-real-hash', role=role.value, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user) -> User:
    return make_user('Admin User', role=Role.ADMIN)


@pytest.fixture
def student(make_user) -> User:
    return make_user('Ahmed Khan', student_id='NUML2024001')


@pytest.fixture
def other_student(make_user) -> User:
    return make_user('Fatima Zahra', student_id='NUML2024002')


def bearer(user: User) -> dict:
    token = create_access_token(user.id, user.role)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth():
    return bearer
