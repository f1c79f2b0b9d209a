"""Pytest configuration and fixtures."""

import os

# In-memory SQLite for the whole run; must be set before settings are cached
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from booksphere import models  # noqa: E402
from booksphere.config import get_settings  # noqa: E402
from booksphere.core import container  # noqa: E402
from booksphere.database import (  # noqa: E402
    Base,
    dispose_engine,
    get_db,
    get_engine,
    get_session_factory,
    initialize_database,
)
from booksphere.infrastructure.identity.services.token_service import (  # noqa: E402
    create_access_token,
)
from booksphere.main import app  # noqa: E402

# Default user ID used by most tests (first user created per test database)
DEFAULT_USER_ID = 1


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    initialize_database(get_settings())
    engine = get_engine()
    Base.metadata.create_all(bind=engine)

    session = get_session_factory(get_settings())()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        dispose_engine()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Registry, sync buffers and gateways are process-wide; start every test clean
    container.reset_singletons()

    with TestClient(app) as test_client:
        yield test_client
        # Shutdown disposes the engine; give back the shared connection first
        db_session.close()

    app.dependency_overrides.clear()
    container.reset_singletons()


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    return create_test_user(db_session, username="reader", email="reader@example.com")


@pytest.fixture
def auth_headers(test_user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def user_factory(db_session: Session) -> Callable[..., models.User]:
    def factory(username: str, **kwargs: Any) -> models.User:  # noqa: ANN401
        return create_test_user(
            db_session, username=username, email=f"{username}@example.com", **kwargs
        )

    return factory


class MoodLibrary:
    """Seeds moods, presets and mapping entries through one session."""

    def __init__(self, db_session: Session) -> None:
        self.db_session = db_session

    def mood(self, name: str, **tempos: int) -> models.MoodReference:
        return create_test_mood(self.db_session, name, **tempos)

    def background(self, mood: models.MoodReference, path: str) -> models.Background:
        background = models.Background(mood_id=mood.id, background_path=path)
        self.db_session.add(background)
        self.db_session.commit()
        self.db_session.refresh(background)
        return background

    def preset(
        self, creator: models.User, book_id: int, name: str = "P1", is_default: bool = False
    ) -> models.Preset:
        return create_test_preset(self.db_session, creator, book_id, name, is_default)

    def map_entry(
        self,
        preset: models.Preset,
        chapter: int,
        page_fraction: float,
        mood: models.MoodReference | None,
        background: models.Background | None = None,
        transition_type: str | None = "fade",
    ) -> models.MoodMapEntry:
        entry = models.MoodMapEntry(
            preset_id=preset.id,
            chapter=chapter,
            page_fraction=page_fraction,
            mood_id=mood.id if mood else None,
            background_id=background.id if background else None,
            transition_type=transition_type,
        )
        self.db_session.add(entry)
        self.db_session.commit()
        self.db_session.refresh(entry)
        return entry

    def trigger(
        self,
        preset: models.Preset,
        mood: models.MoodReference,
        page_range: list[int] | None = None,
        priority: int = 1,
        is_active: bool = True,
    ) -> models.MoodTrigger:
        condition: dict[str, Any] = {}
        if page_range is not None:
            condition["page_range"] = page_range
        trigger = models.MoodTrigger(
            preset_id=preset.id,
            mood_id=mood.id,
            trigger_condition=condition,
            priority=priority,
            is_active=is_active,
        )
        self.db_session.add(trigger)
        self.db_session.commit()
        self.db_session.refresh(trigger)
        return trigger


@pytest.fixture
def moods(db_session: Session) -> MoodLibrary:
    return MoodLibrary(db_session)


def create_test_user(
    db_session: Session,
    username: str = "reader",
    email: str = "reader@example.com",
    mood_sensitivity: float | None = None,
    role: str = "reader",
) -> models.User:
    """Helper function to create a reader profile."""
    user = models.User(
        username=username,
        email=email,
        role=role,
        mood_sensitivity=mood_sensitivity,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def create_test_mood(
    db_session: Session,
    name: str,
    tempo_electronic: int = 120,
    tempo_classical: int = 90,
    tempo_lofi: int = 80,
    tempo_custom: int = 0,
) -> models.MoodReference:
    """Helper function to create a mood reference."""
    mood = models.MoodReference(
        mood_name=name,
        tempo_electronic=tempo_electronic,
        tempo_classical=tempo_classical,
        tempo_lofi=tempo_lofi,
        tempo_custom=tempo_custom,
    )
    db_session.add(mood)
    db_session.commit()
    db_session.refresh(mood)
    return mood


def create_test_preset(
    db_session: Session,
    creator: models.User,
    book_id: int,
    name: str = "P1",
    is_default: bool = False,
) -> models.Preset:
    """Helper function to create a preset for a book."""
    preset = models.Preset(
        creator_id=creator.id,
        book_id=book_id,
        name=name,
        is_default=is_default,
    )
    db_session.add(preset)
    db_session.commit()
    db_session.refresh(preset)
    return preset
