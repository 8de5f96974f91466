"""
Pytest Configuration and Fixtures

Provides test database setup and common fixtures.
"""
import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from duellog.database import configure_sqlite
from duellog.services.schema_service import ensure_schema

# Use SQLite in-memory for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

GAME_KEY = "master_duel"
GAME_ID = "game-md"
USER_ID = "user-local"


def make_memory_engine():
    """Private in-memory store sharing one connection"""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return configure_sqlite(engine)


test_engine = make_memory_engine()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Setup test database schema once for all tests."""
    # Same migrations the application runs at startup
    ensure_schema(test_engine)

    yield

    test_engine.dispose()


@pytest.fixture
def fresh_engine():
    """An empty store, separate from the shared test database."""
    engine = make_memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(setup_test_database):
    """Create a fresh database session for each test."""
    connection = test_engine.connect()
    transaction = connection.begin()
    # Service commits release a SAVEPOINT; the outer transaction is rolled back
    session = TestingSessionLocal(bind=connection, join_transaction_mode="create_savepoint")

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    from duellog.database import get_db
    from duellog.main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Override the lifespan to skip schema bootstrap against the real store
    original_lifespan = app.router.lifespan_context

    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    app.router.lifespan_context = original_lifespan


@pytest.fixture
def match_service(db_session):
    from duellog.services.match_service import MatchService

    return MatchService(db_session, USER_ID)


@pytest.fixture
def make_match(match_service):
    """Factory recording a match through the service; returns its id."""
    from duellog.schemas.deck import DeckRef
    from duellog.schemas.match import CreateMatchRequest

    def _make(
        season_code="S49",
        day=date(2025, 12, 31),
        my_deck=("蛇眼", "天盃"),
        opp_deck=("閃刀姬", None),
        **fields,
    ):
        fields.setdefault("rank", "鑽石 II")
        fields.setdefault("play_order", "先攻")
        fields.setdefault("result", "W")
        request = CreateMatchRequest(
            game_key=GAME_KEY,
            season_code=season_code,
            date=day,
            my_deck=DeckRef(main=my_deck[0], sub=my_deck[1]),
            opp_deck=DeckRef(main=opp_deck[0], sub=opp_deck[1]),
            **fields,
        )
        return match_service.create(request)

    return _make


@pytest.fixture
def sample_match(make_match):
    """Create a sample ranked match for testing."""
    return make_match()
