import datetime as dt
import os
import tempfile

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO"] = "false"
os.environ.setdefault("EXPORT_DIR", tempfile.mkdtemp(prefix="solar_exports_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_db, get_today
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.models.project import Project
from app.db.models.user import Role, User
from app.main import app
from app.services.forecasting.engine import ProjectPlan

TODAY = dt.date(2024, 1, 6)


@pytest.fixture
def plan():
    return ProjectPlan(
        total_piles=200,
        total_racking_tables=100,
        total_modules=1000,
        planned_start_date=dt.date(2024, 1, 1),
        planned_end_date=dt.date(2024, 1, 11),
        planned_piles_per_day=20,
        planned_racking_per_day=10,
        planned_modules_per_day=100,
    )


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db, login: str, role: Role) -> User:
    u = User(login=login, password_hash=hash_password("secret123"), role=role.value, full_name=login.title())
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def admin_user(db_session):
    return _make_user(db_session, "admin", Role.admin)


@pytest.fixture
def installer_user(db_session):
    return _make_user(db_session, "installer", Role.installer)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=user.login, role=user.role)}"}


@pytest.fixture
def inspector_user(db_session):
    return _make_user(db_session, "inspector", Role.qc_inspector)


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def installer_headers(installer_user):
    return auth_headers(installer_user)


@pytest.fixture
def inspector_headers(inspector_user):
    return auth_headers(inspector_user)


@pytest.fixture
def project(db_session):
    p = Project(
        code="SF-1",
        name="Sunfield",
        location="Kern County, CA",
        status="active",
        total_piles=200,
        total_racking_tables=100,
        total_modules=1000,
        planned_start_date=dt.date(2024, 1, 1),
        planned_end_date=dt.date(2024, 1, 11),
        planned_piles_per_day=20,
        planned_racking_per_day=10,
        planned_modules_per_day=100,
    )
    db_session.add(p)
    db_session.commit()
    db_session.refresh(p)
    return p
