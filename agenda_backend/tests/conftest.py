import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.database import get_db, init_db, make_engine
from src.api.main import app
from src.api.repository import SqlAlchemyRepository
from src.api.service import AgendaService


class UntouchableRepository:
    """Repository that fails the test on any store access."""

    def __getattr__(self, name):
        raise AssertionError(f"store was accessed through {name}")


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db):
    return SqlAlchemyRepository(db)


@pytest.fixture
def service(repository):
    return AgendaService(repository)


@pytest.fixture
def untouched_service():
    return AgendaService(UntouchableRepository())


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
