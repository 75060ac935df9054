"""
pytest Fixtures for Reading Log Tests

Shared fixtures used across all test files.

For database tests each test gets its own SQLite in-memory engine, so
tests never see each other's books. StaticPool keeps the single in-memory
connection alive for the lifetime of the engine.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from reading_log.catalog.clock import FixedClock
from reading_log.database import Base, get_db
from reading_log.dependencies import get_clock
from reading_log.main import app
from reading_log.models import Book
from reading_log.services.notifications import get_notifier
from tests.fakes import RecordingNotifier

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine():
    """A fresh in-memory catalog store with the books table created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """A session on the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """
    A clock pinned to 2023-01-20.

    Tests move it by assigning clock.instant.
    """
    return FixedClock.on(date(2023, 1, 20))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(
    db_session: Session,
    clock: FixedClock,
    notifier: RecordingNotifier,
) -> Generator[TestClient, None, None]:
    """
    A test client wired to the test database, the fixed clock and the
    recording notifier.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def add_book(db: Session, **fields) -> Book:
    book = Book(**fields)
    db.add(book)
    db.commit()
    db.refresh(book)
    return book


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """The catalog's only book, finished on 2023-01-10."""
    return add_book(
        db_session,
        id=1,
        title="1984",
        author="Orwell",
        publication_year=1949,
        language="English",
        format="Paperback",
        finish_date="2023-01-10",
        read_year=2023,
        reading_time_in_days=0,
    )


@pytest.fixture
def library(db_session: Session) -> list[Book]:
    """
    A small catalog spanning two read years.

    Inserted out of id order so that ordering guarantees are exercised.
    """
    rows = [
        dict(id=3, title="the Two Towers", author="J.R.R. Tolkien", publication_year=1954,
             language="English", format="Ebook", finish_date="2023-03-01",
             read_year=2023, reading_time_in_days=20),
        dict(id=1, title="1984", author="George Orwell", publication_year=1949,
             language="English", format="Paperback", finish_date="2022-12-20",
             read_year=2022, reading_time_in_days=0),
        dict(id=2, title="The Fellowship of the Ring", author="J.R.R. Tolkien",
             publication_year=1954, language="English", format="Hardcover",
             finish_date="2023-02-09", read_year=2023, reading_time_in_days=51),
        dict(id=4, title="Cien años de soledad", author="Gabriel García Márquez",
             publication_year=1967, language="Spanish", format="Paperback",
             finish_date="2023-04-15", read_year=2023, reading_time_in_days=45),
        dict(id=5, title="Animal Farm", author="George Orwell", publication_year=1945,
             language="english", format="Paperback", finish_date="2023-05-01",
             read_year=2023, reading_time_in_days=16),
    ]
    return [add_book(db_session, **row) for row in rows]
