"""
Test configuration and fixtures for the MangaVerse Reader API tests.
"""
import os

os.environ["ENVIRONMENT"] = "testing"

import sqlite3
from typing import Any, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mangaverse.core.auth import create_access_token
from mangaverse.core.database import Base, get_db
from mangaverse.crud.catalog import crud_author, crud_genre, crud_translation_group
from mangaverse.crud.chapter import crud_chapter
from mangaverse.crud.content import crud_content
from mangaverse.crud.user import crud_user
from mangaverse.main import app
from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.models.content import Content
from mangaverse.models.user import User, UserRole
from mangaverse.schemas.catalog import AuthorCreate, GenreCreate, TranslationGroupCreate
from mangaverse.schemas.content import ContentCreate
from mangaverse.schemas.user import UserCreate
from mangaverse.storage.memory import MemoryStorage

# Use in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False,
)


@event.listens_for(Engine, "connect")
def enable_sqlite_fks(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_prefix() -> str:
    return "/api"


# Users


@pytest.fixture
def test_user_data() -> Dict[str, Any]:
    return {
        "username": "reader",
        "email": "reader@example.com",
        "password": "readerpass123",
        "first_name": "Minh",
        "last_name": "Nguyen",
    }


@pytest.fixture
def test_user(db_session, test_user_data) -> User:
    """A regular user with 1000 coins."""
    user = crud_user.create(db_session, obj_in=UserCreate(**test_user_data))
    return crud_user.update(db_session, db_obj=user, obj_in={"balance": 1000})


@pytest.fixture
def test_user_2(db_session) -> User:
    user_in = UserCreate(
        username="second", email="second@example.com", password="secondpass123"
    )
    return crud_user.create(db_session, obj_in=user_in)


@pytest.fixture
def test_admin_user(db_session) -> User:
    user_in = UserCreate(
        username="admin", email="admin@example.com", password="adminpass123"
    )
    return crud_user.create(db_session, obj_in=user_in, role=UserRole.ADMIN)


@pytest.fixture
def auth_headers(test_user) -> Dict[str, str]:
    """Authentication headers for regular user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def auth_headers_2(test_user_2) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(test_user_2.id)}"}


@pytest.fixture
def admin_headers(test_admin_user) -> Dict[str, str]:
    """Authentication headers for admin user."""
    return {"Authorization": f"Bearer {create_access_token(test_admin_user.id)}"}


# Catalog


@pytest.fixture
def test_author(db_session):
    return crud_author.create(
        db_session, obj_in=AuthorCreate(name="Eiichiro Oda", info="Mangaka")
    )


@pytest.fixture
def test_group(db_session):
    return crud_translation_group.create(
        db_session, obj_in=TranslationGroupCreate(name="Straw Hat Scans")
    )


@pytest.fixture
def test_genres(db_session):
    return [
        crud_genre.create(db_session, obj_in=GenreCreate(name=name))
        for name in ("Action", "Adventure", "Comedy")
    ]


@pytest.fixture
def test_manga(db_session, test_author, test_group, test_genres) -> Content:
    content_in = ContentCreate(
        title="One Piece",
        alternative_title="Vua Hai Tac",
        type="manga",
        author_id=test_author.id,
        translation_group_id=test_group.id,
        release_year=1997,
        genre_ids=[test_genres[0].id, test_genres[1].id],
    )
    return crud_content.create(db_session, obj_in=content_in)


@pytest.fixture
def test_novel(db_session, test_author, test_genres) -> Content:
    content_in = ContentCreate(
        title="Đấu Phá Thương Khung",
        type="novel",
        author_id=test_author.id,
        status="completed",
        genre_ids=[test_genres[0].id],
    )
    return crud_content.create(db_session, obj_in=content_in)


def add_chapter(
    db_session,
    content: Content,
    number: int,
    *,
    price: Optional[int] = None,
    body: Optional[str] = None,
) -> Chapter:
    chapter = Chapter(
        content_id=content.id,
        number=number,
        title=f"Chapter {number}",
        is_locked=price is not None,
        unlock_price=price,
    )
    bodies = [ChapterContent(content=body, page_order=1)] if body is not None else []
    return crud_chapter.add(db_session, chapter=chapter, bodies=bodies)


@pytest.fixture
def manga_chapters(db_session, test_manga):
    """Chapter 1 free, chapter 2 locked at 500 coins, chapter 3 free."""
    return [
        add_chapter(db_session, test_manga, 1, body='{"1": "a.jpg", "2": "b.jpg"}'),
        add_chapter(db_session, test_manga, 2, price=500, body='{"1": "c.jpg"}'),
        add_chapter(db_session, test_manga, 3, body='{"1": "d.jpg"}'),
    ]


# Service-level storage


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """
    Content 7 ("One Piece", manga) with chapter 1 free and chapter 2 locked
    at 500; content 8 is a novel with one free chapter. User 42 holds 1000.
    """
    storage = MemoryStorage()
    storage.add_content(Content(id=7, title="One Piece", type="manga", author_id=1))
    storage.add_content(Content(id=8, title="Tiên Nghịch", type="novel", author_id=1))
    storage.add_chapter(
        Chapter(id=1, content_id=7, number=1, title="Romance Dawn", is_locked=False),
        [ChapterContent(id=10, chapter_id=1, content='{"1": "p1.jpg", "2": "p2.jpg"}')],
    )
    storage.add_chapter(
        Chapter(id=2, content_id=7, number=2, is_locked=True, unlock_price=500),
        [ChapterContent(id=11, chapter_id=2, content='{"1": "p3.jpg"}')],
    )
    storage.add_chapter(
        Chapter(id=3, content_id=8, number=1, is_locked=False),
        [ChapterContent(id=12, chapter_id=3, content="<p>Once upon a time</p>")],
    )
    storage.set_balance(42, 1000)
    return storage


@pytest.fixture
def reader() -> User:
    return User(id=42, username="reader", role="user", balance=1000, is_active=True)
