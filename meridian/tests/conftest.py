import base64
from datetime import datetime
from typing import Iterable

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from meridian.app.deps import db_session
from meridian.app.domain.models import Project
from meridian.app.main import create_app
from meridian.app.settings import Settings, get_settings

SECRET = b"meridian-test-secret-0123456789abcdef"
AUDIENCE = "meridian-tests"

TEST_SETTINGS = Settings(
    database_url="sqlite://",
    auth_secret=base64.b64encode(SECRET).decode(),
    auth_audience=AUDIENCE,
)


def make_token(sub: str = "editor-1", roles: Iterable[str] = ("edit",), **claims) -> str:
    payload = {"sub": sub, "roles": list(roles), "aud": AUDIENCE, **claims}
    return jwt.encode(payload, SECRET, algorithm="HS256")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def client(engine):
    app = create_app()

    def _session():
        with Session(engine) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    app.dependency_overrides[db_session] = _session
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    return TestClient(app)


@pytest.fixture
def headers():
    def _headers(sub: str = "editor-1", roles: Iterable[str] = ("edit",)) -> dict:
        return {"Authorization": f"Bearer {make_token(sub, roles)}"}

    return _headers


@pytest.fixture
def seed(engine):
    """Insert a record directly and return its id."""

    def _seed(
        model=Project,
        name: str = "seeded",
        private: bool = False,
        published: bool = False,
        owner: str = "owner-1",
        data: dict | None = None,
        created_at: datetime | None = None,
    ) -> str:
        with Session(engine) as session:
            record = model(
                name=name,
                owner=owner,
                private=private,
                published=published,
                data=data if data is not None else {"name": name},
            )
            if created_at is not None:
                record.created_at = created_at
                record.updated_at = created_at
            session.add(record)
            session.commit()
            return record.id

    return _seed


@pytest.fixture
def fetch(engine):
    def _fetch(model, record_id: str):
        with Session(engine) as session:
            return session.get(model, record_id)

    return _fetch
