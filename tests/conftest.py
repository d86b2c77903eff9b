"""Shared test configuration and fixtures for EventDesk tests"""

import logging
import os
from datetime import date

import pytest
from tests.config import test_config
from tests.redis_doubles import FakeRedis

os.environ["DATABASE_URL"] = test_config["database_url"]
os.environ["REDIS_URL"] = test_config["redis_url"]
os.environ["STORAGE_BACKEND"] = test_config["storage_backend"]
os.environ["TIME_ZONE"] = test_config["time_zone"]

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from eventdesk.main import app  # noqa: E402
from eventdesk.models.database import get_db, get_redis  # noqa: E402
from eventdesk.repositories.local import LocalRepository  # noqa: E402
from eventdesk.repositories.sql import (  # noqa: E402
    SqlProjectRepository,
    SqlRegistrationRepository,
)
from eventdesk.services.draft_store import DraftStore  # noqa: E402
from eventdesk.services.project_service import ProjectService  # noqa: E402
from eventdesk.services.registration_service import RegistrationService  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def engine(tmp_path):
    """SQLite database per test with the full schema"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'eventdesk.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def _db_session(engine):
    """Private DB session for fixtures only.

    Do not use this fixture directly in tests. Prefer the repository and
    service fixtures below.
    """
    session = Session(engine)
    yield session
    session.close()


@pytest.fixture
def project_repository(_db_session):
    return SqlProjectRepository(_db_session)


@pytest.fixture
def registration_repository(_db_session):
    return SqlRegistrationRepository(_db_session)


@pytest.fixture
def local_repository(tmp_path):
    """Local snapshot store persisted under the test's temp directory"""
    return LocalRepository(tmp_path / "store.json")


@pytest.fixture
def project_service(project_repository, registration_repository):
    """Create a ProjectService instance for testing"""
    return ProjectService(project_repository, registration_repository)


@pytest.fixture
def registration_service(project_repository, registration_repository):
    """Create a RegistrationService instance for testing"""
    return RegistrationService(project_repository, registration_repository)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def draft_store(fake_redis):
    return DraftStore(redis_client=fake_redis, ttl_seconds=1800)


@pytest.fixture
def project_details():
    return {
        "name": "Spring Meetup",
        "date": date(2025, 4, 15).isoformat(),
        "location": "Community Hall",
        "managerId": "manager-1",
    }


@pytest.fixture
def project(project_service, project_details):
    """A freshly created project with default configuration"""
    return project_service.create_project(project_details)


@pytest.fixture
def open_project(project_service, project):
    """A project whose landing and registration pages are enabled"""
    project_service.apply_patch(project.id, "landingPage", {"isEnabled": True})
    return project_service.apply_patch(
        project.id, "registrationPage", {"isEnabled": True}
    )


@pytest.fixture
def client(engine, fake_redis):
    """Test client bound to the per-test database and the in-memory Redis"""

    # Store original overrides to restore them later
    original_overrides = app.dependency_overrides.copy()

    def get_test_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_redis] = lambda: fake_redis

    yield TestClient(app)

    # Completely restore original state
    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
