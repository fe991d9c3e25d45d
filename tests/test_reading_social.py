"""
Test reading history, favorites and comments.
"""
from datetime import datetime, timezone
from typing import List

from fastapi.testclient import TestClient
from sqlalchemy import insert

from mangaverse.crud.reading_history import crud_reading_history
from mangaverse.models.chapter import Chapter
from mangaverse.models.content import Content
from mangaverse.models.reading_history import ReadingHistory
from mangaverse.models.user import User

from conftest import add_chapter


class TestReadingHistoryEndpoints:
    def test_record_reading(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        response = client.post(
            f"{api_prefix}/reading-history",
            json={"content_id": test_manga.id, "chapter_id": manga_chapters[0].id},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["chapter_id"] == manga_chapters[0].id
        assert data["last_read_at"] is not None

    def test_one_entry_per_content(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        """Test recording a later chapter moves the existing entry."""
        for chapter in manga_chapters:
            client.post(
                f"{api_prefix}/reading-history",
                json={"content_id": test_manga.id, "chapter_id": chapter.id},
                headers=auth_headers,
            )

        response = client.get(f"{api_prefix}/reading-history", headers=auth_headers)

        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["chapter_id"] == manga_chapters[2].id
        assert data[0]["content"]["title"] == "One Piece"

    def test_history_is_private(self, client: TestClient, api_prefix: str, auth_headers: dict, auth_headers_2: dict, test_manga: Content, manga_chapters: List[Chapter]):
        client.post(
            f"{api_prefix}/reading-history",
            json={"content_id": test_manga.id, "chapter_id": manga_chapters[0].id},
            headers=auth_headers,
        )

        response = client.get(f"{api_prefix}/reading-history", headers=auth_headers_2)

        assert response.json()["data"] == []

    def test_chapter_from_other_content(self, client: TestClient, api_prefix: str, auth_headers: dict, db_session, test_manga: Content, test_novel: Content):
        novel_chapter = add_chapter(db_session, test_novel, 1, body="<p>Hi</p>")

        response = client.post(
            f"{api_prefix}/reading-history",
            json={"content_id": test_manga.id, "chapter_id": novel_chapter.id},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_requires_login(self, client: TestClient, api_prefix: str):
        response = client.get(f"{api_prefix}/reading-history")

        assert response.status_code == 401


class TestReadingHistoryUpsert:
    def test_row_written_elsewhere_is_updated(self, db_session, test_user: User, test_manga: Content, manga_chapters: List[Chapter]):
        """Test a row the session never loaded is updated, not duplicated."""
        db_session.execute(
            insert(ReadingHistory.__table__).values(
                user_id=test_user.id,
                content_id=test_manga.id,
                chapter_id=manga_chapters[0].id,
                last_read_at=datetime.now(timezone.utc),
            )
        )

        entry = crud_reading_history.upsert(
            db_session,
            user_id=test_user.id,
            content_id=test_manga.id,
            chapter_id=manga_chapters[2].id,
        )
        db_session.commit()

        assert entry.chapter_id == manga_chapters[2].id
        assert db_session.query(ReadingHistory).count() == 1

    def test_repeated_reads_keep_one_row(self, db_session, test_user: User, test_manga: Content, manga_chapters: List[Chapter]):
        for chapter in manga_chapters + manga_chapters:
            crud_reading_history.upsert(
                db_session,
                user_id=test_user.id,
                content_id=test_manga.id,
                chapter_id=chapter.id,
            )
        db_session.commit()

        entries = crud_reading_history.get_by_user(db_session, user_id=test_user.id)
        assert len(entries) == 1
        assert entries[0].chapter_id == manga_chapters[2].id


class TestFavoriteEndpoints:
    def test_toggle_favorite(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content):
        """Test the first toggle adds and the second removes."""
        added = client.post(f"{api_prefix}/favorites/{test_manga.id}", headers=auth_headers)
        listed = client.get(f"{api_prefix}/favorites", headers=auth_headers)
        removed = client.post(f"{api_prefix}/favorites/{test_manga.id}", headers=auth_headers)

        assert added.json()["data"] == {"content_id": test_manga.id, "added": True}
        assert [f["content"]["title"] for f in listed.json()["data"]] == ["One Piece"]
        assert removed.json()["data"]["added"] is False
        assert removed.json()["message"] == "Content removed from favorites successfully"
        assert client.get(f"{api_prefix}/favorites", headers=auth_headers).json()["data"] == []

    def test_favorite_unknown_content(self, client: TestClient, api_prefix: str, auth_headers: dict):
        response = client.post(f"{api_prefix}/favorites/9999", headers=auth_headers)

        assert response.status_code == 404


class TestCommentEndpoints:
    def test_comment_on_chapter(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        """Test chapter comments show up on the chapter and on the content."""
        response = client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_manga.id, "chapter_id": manga_chapters[0].id, "text": "Peak fiction"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["username"] == "reader"

        chapter_comments = client.get(f"{api_prefix}/chapters/{manga_chapters[0].id}/comments")
        content_comments = client.get(f"{api_prefix}/content/{test_manga.id}/comments")
        reader_view = client.get(f"{api_prefix}/chapters/{manga_chapters[0].id}")

        assert [c["text"] for c in chapter_comments.json()["data"]] == ["Peak fiction"]
        assert [c["text"] for c in content_comments.json()["data"]] == ["Peak fiction"]
        assert [c["username"] for c in reader_view.json()["data"]["comments"]] == ["reader"]

    def test_comment_on_content(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_manga.id, "text": "Love this series"},
            headers=auth_headers,
        )

        chapter_comments = client.get(f"{api_prefix}/chapters/{manga_chapters[0].id}/comments")
        content_comments = client.get(f"{api_prefix}/content/{test_manga.id}/comments")

        assert chapter_comments.json()["data"] == []
        assert content_comments.json()["data"][0]["chapter_id"] is None

    def test_comment_chapter_mismatch(self, client: TestClient, api_prefix: str, auth_headers: dict, test_novel: Content, manga_chapters: List[Chapter]):
        response = client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_novel.id, "chapter_id": manga_chapters[0].id, "text": "Wrong place"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_empty_comment(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content):
        response = client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_manga.id, "text": ""},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_delete_comment_permissions(self, client: TestClient, api_prefix: str, auth_headers: dict, auth_headers_2: dict, admin_headers: dict, test_manga: Content):
        """Test only the author or an admin can delete a comment."""
        first = client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_manga.id, "text": "First"},
            headers=auth_headers,
        ).json()["data"]["id"]
        second = client.post(
            f"{api_prefix}/comments",
            json={"content_id": test_manga.id, "text": "Second"},
            headers=auth_headers,
        ).json()["data"]["id"]

        assert client.delete(f"{api_prefix}/comments/{first}", headers=auth_headers_2).status_code == 403
        assert client.delete(f"{api_prefix}/comments/{first}", headers=auth_headers).status_code == 200
        assert client.delete(f"{api_prefix}/comments/{second}", headers=admin_headers).status_code == 200
        assert client.delete(f"{api_prefix}/comments/{second}", headers=admin_headers).status_code == 404
