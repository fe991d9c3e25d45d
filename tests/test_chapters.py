"""
Test chapter reading, unlocking and administration endpoints.
"""
from typing import List

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from mangaverse.models.chapter import Chapter
from mangaverse.models.content import Content
from mangaverse.models.reading_history import ReadingHistory
from mangaverse.models.unlocked_chapter import UnlockedChapter
from mangaverse.models.user import User


class TestChapterReading:
    """Test the access gate over HTTP."""

    def test_read_free_chapter(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter]):
        """Test anonymous readers get the pages of a free chapter."""
        response = client.get(f"{api_prefix}/chapters/{manga_chapters[0].id}")

        assert response.status_code == 200
        response_data = response.json()
        assert response_data["message"] == "Chapter retrieved successfully"
        data = response_data["data"]
        assert data["is_unlocked"] is True
        assert data["content_type"] == "manga"
        assert data["content"] == {"kind": "pages", "pages": ["a.jpg", "b.jpg"]}
        assert data["navigation"]["previous"] is None
        assert data["navigation"]["next"]["number"] == 2
        assert data["comments"] == []

    def test_read_locked_chapter(self, client: TestClient, api_prefix: str, auth_headers: dict, manga_chapters: List[Chapter]):
        """Test a locked chapter comes back without content."""
        response = client.get(f"{api_prefix}/chapters/{manga_chapters[1].id}", headers=auth_headers)

        assert response.status_code == 200
        response_data = response.json()
        assert response_data["message"] == "Chapter is locked"
        data = response_data["data"]
        assert data["is_unlocked"] is False
        assert data["content"] is None
        assert data["chapter"]["unlock_price"] == 500

    def test_locked_read_does_not_count_view(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter], db_session: Session):
        client.get(f"{api_prefix}/chapters/{manga_chapters[1].id}")

        db_session.refresh(manga_chapters[1])
        assert manga_chapters[1].views == 0

    def test_read_counts_views(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter], db_session: Session):
        chapter_id = manga_chapters[0].id
        client.get(f"{api_prefix}/chapters/{chapter_id}")
        client.get(f"{api_prefix}/chapters/{chapter_id}")

        db_session.refresh(manga_chapters[0])
        assert manga_chapters[0].views == 2

    def test_read_records_history(self, client: TestClient, api_prefix: str, auth_headers: dict, test_user: User, manga_chapters: List[Chapter], db_session: Session):
        """Test a signed-in read keeps one history row per content."""
        client.get(f"{api_prefix}/chapters/{manga_chapters[0].id}", headers=auth_headers)
        client.get(f"{api_prefix}/chapters/{manga_chapters[2].id}", headers=auth_headers)

        rows = db_session.query(ReadingHistory).filter(ReadingHistory.user_id == test_user.id).all()
        assert len(rows) == 1
        assert rows[0].chapter_id == manga_chapters[2].id

    def test_read_missing_chapter(self, client: TestClient, api_prefix: str):
        response = client.get(f"{api_prefix}/chapters/9999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Chapter with id 9999 not found"

    def test_read_with_invalid_token(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter]):
        """Test a malformed token is rejected rather than treated as anonymous."""
        response = client.get(
            f"{api_prefix}/chapters/{manga_chapters[0].id}",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    def test_read_by_number(self, client: TestClient, api_prefix: str, test_manga: Content, manga_chapters: List[Chapter]):
        response = client.get(f"{api_prefix}/content/{test_manga.id}/chapter-by-number/3")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["chapter"]["id"] == manga_chapters[2].id
        assert data["content"]["pages"] == ["d.jpg"]
        assert data["navigation"]["next"] is None

    def test_read_by_number_not_found(self, client: TestClient, api_prefix: str, test_manga: Content, manga_chapters: List[Chapter]):
        """Test unknown content and unknown chapter numbers give different errors."""
        missing_content = client.get(f"{api_prefix}/content/9999/chapter-by-number/1")
        missing_chapter = client.get(f"{api_prefix}/content/{test_manga.id}/chapter-by-number/42")

        assert missing_content.status_code == 404
        assert missing_chapter.status_code == 404
        assert missing_content.json()["detail"] == "Content with id 9999 not found"
        assert missing_chapter.json()["detail"] == f"Chapter 42 not found for content {test_manga.id}"

    def test_read_by_title_slug(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter]):
        response = client.get(f"{api_prefix}/content/by-title/one-piece/chapter/1")

        assert response.status_code == 200
        assert response.json()["data"]["chapter"]["id"] == manga_chapters[0].id

    def test_read_by_title_not_found(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter]):
        response = client.get(f"{api_prefix}/content/by-title/naruto/chapter/1")

        assert response.status_code == 404

    def test_read_novel_chapter(self, client: TestClient, api_prefix: str, admin_headers: dict, test_novel: Content):
        """Test novel chapters created from plain text are served as HTML."""
        created = client.post(
            f"{api_prefix}/content/{test_novel.id}/chapters",
            json={"title": "Prologue", "html": "Line one\nLine two"},
            headers=admin_headers,
        )
        assert created.status_code == 201

        response = client.get(f"{api_prefix}/chapters/{created.json()['data']['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["content_type"] == "novel"
        assert data["content"] == {"kind": "html", "html": "<p>Line one</p>\n<p>Line two</p>"}


class TestChapterList:
    def test_list_flags_locked_chapters(self, client: TestClient, api_prefix: str, test_manga: Content, manga_chapters: List[Chapter]):
        response = client.get(f"{api_prefix}/content/{test_manga.id}/chapters")

        assert response.status_code == 200
        response_data = response.json()
        assert response_data["meta"]["total"] == 3
        assert [c["number"] for c in response_data["data"]] == [1, 2, 3]
        assert [c["is_unlocked"] for c in response_data["data"]] == [True, False, True]

    def test_list_reflects_purchases(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        """Test unlocked chapters are flagged for their buyer only."""
        client.post(f"{api_prefix}/chapters/{manga_chapters[1].id}/unlock", headers=auth_headers)

        mine = client.get(f"{api_prefix}/content/{test_manga.id}/chapters", headers=auth_headers)
        anonymous = client.get(f"{api_prefix}/content/{test_manga.id}/chapters")

        assert mine.json()["data"][1]["is_unlocked"] is True
        assert anonymous.json()["data"][1]["is_unlocked"] is False

    def test_list_unknown_content(self, client: TestClient, api_prefix: str):
        response = client.get(f"{api_prefix}/content/9999/chapters")

        assert response.status_code == 404


class TestChapterUnlock:
    """Test spending coins on locked chapters."""

    def test_unlock_chapter(self, client: TestClient, api_prefix: str, auth_headers: dict, test_user: User, manga_chapters: List[Chapter], db_session: Session):
        """Test a successful unlock debits the price and opens the chapter."""
        chapter_id = manga_chapters[1].id
        response = client.post(f"{api_prefix}/chapters/{chapter_id}/unlock", headers=auth_headers)

        assert response.status_code == 200
        response_data = response.json()
        assert response_data["message"] == "Chapter unlocked successfully"
        assert response_data["data"]["new_balance"] == 500
        assert response_data["data"]["chapter_id"] == chapter_id
        assert response_data["data"]["unlocked_at"]

        db_session.refresh(test_user)
        assert test_user.balance == 500

        chapter = client.get(f"{api_prefix}/chapters/{chapter_id}", headers=auth_headers)
        assert chapter.json()["data"]["is_unlocked"] is True
        assert chapter.json()["data"]["content"]["pages"] == ["c.jpg"]

    def test_unlock_is_per_user(self, client: TestClient, api_prefix: str, auth_headers: dict, auth_headers_2: dict, manga_chapters: List[Chapter]):
        chapter_id = manga_chapters[1].id
        client.post(f"{api_prefix}/chapters/{chapter_id}/unlock", headers=auth_headers)

        response = client.get(f"{api_prefix}/chapters/{chapter_id}", headers=auth_headers_2)

        assert response.json()["data"]["is_unlocked"] is False

    def test_unlock_twice(self, client: TestClient, api_prefix: str, auth_headers: dict, test_user: User, manga_chapters: List[Chapter], db_session: Session):
        """Test the second unlock is rejected and charges nothing."""
        chapter_id = manga_chapters[1].id
        client.post(f"{api_prefix}/chapters/{chapter_id}/unlock", headers=auth_headers)
        response = client.post(f"{api_prefix}/chapters/{chapter_id}/unlock", headers=auth_headers)

        assert response.status_code == 409
        db_session.refresh(test_user)
        assert test_user.balance == 500
        assert db_session.query(UnlockedChapter).count() == 1

    def test_unlock_insufficient_funds(self, client: TestClient, api_prefix: str, auth_headers_2: dict, manga_chapters: List[Chapter], db_session: Session):
        response = client.post(f"{api_prefix}/chapters/{manga_chapters[1].id}/unlock", headers=auth_headers_2)

        assert response.status_code == 402
        detail = response.json()["detail"]
        assert detail["balance"] == 0
        assert detail["required"] == 500
        assert db_session.query(UnlockedChapter).count() == 0

    def test_unlock_free_chapter(self, client: TestClient, api_prefix: str, auth_headers: dict, manga_chapters: List[Chapter]):
        response = client.post(f"{api_prefix}/chapters/{manga_chapters[0].id}/unlock", headers=auth_headers)

        assert response.status_code == 400

    def test_unlock_missing_chapter(self, client: TestClient, api_prefix: str, auth_headers: dict):
        response = client.post(f"{api_prefix}/chapters/9999/unlock", headers=auth_headers)

        assert response.status_code == 404

    def test_unlock_unauthenticated(self, client: TestClient, api_prefix: str, manga_chapters: List[Chapter]):
        response = client.post(f"{api_prefix}/chapters/{manga_chapters[1].id}/unlock")

        assert response.status_code == 401

    def test_unlocked_chapter_ids(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        """Test listing the chapters the user has bought for a content."""
        client.post(f"{api_prefix}/chapters/{manga_chapters[1].id}/unlock", headers=auth_headers)

        response = client.get(f"{api_prefix}/user/unlocked-chapters/{test_manga.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "content_id": test_manga.id,
            "chapter_ids": [manga_chapters[1].id],
        }

    def test_unlocked_chapter_ids_requires_login(self, client: TestClient, api_prefix: str, test_manga: Content):
        response = client.get(f"{api_prefix}/user/unlocked-chapters/{test_manga.id}")

        assert response.status_code == 401


class TestChapterAdmin:
    """Test chapter management (Admin only)."""

    def test_create_chapter_default_number(self, client: TestClient, api_prefix: str, admin_headers: dict, test_manga: Content, manga_chapters: List[Chapter]):
        """Test a chapter without a number is appended after the highest one."""
        response = client.post(
            f"{api_prefix}/content/{test_manga.id}/chapters",
            json={"title": "Next", "images": ["n1.jpg", "n2.jpg"]},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["number"] == 4
        assert data["is_locked"] is False
        assert data["unlock_price"] is None

        chapter = client.get(f"{api_prefix}/chapters/{data['id']}")
        assert chapter.json()["data"]["content"]["pages"] == ["n1.jpg", "n2.jpg"]

    def test_create_first_chapter(self, client: TestClient, api_prefix: str, admin_headers: dict, test_manga: Content):
        response = client.post(
            f"{api_prefix}/content/{test_manga.id}/chapters",
            json={"is_locked": True, "unlock_price": 200},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["number"] == 1
        assert response.json()["data"]["unlock_price"] == 200

    def test_create_locked_chapter_without_price(self, client: TestClient, api_prefix: str, admin_headers: dict, test_manga: Content):
        response = client.post(
            f"{api_prefix}/content/{test_manga.id}/chapters",
            json={"is_locked": True},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_create_chapter_not_admin(self, client: TestClient, api_prefix: str, auth_headers: dict, test_manga: Content):
        response = client.post(
            f"{api_prefix}/content/{test_manga.id}/chapters",
            json={"title": "Nope"},
            headers=auth_headers,
        )

        assert response.status_code == 403

    def test_lock_chapter(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        response = client.patch(
            f"{api_prefix}/chapters/{manga_chapters[0].id}/lock",
            json={"is_locked": True, "unlock_price": 300},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_locked"] is True
        assert data["unlock_price"] == 300

    def test_lock_without_price(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        """Test locking a free chapter needs a price."""
        response = client.patch(
            f"{api_prefix}/chapters/{manga_chapters[0].id}/lock",
            json={"is_locked": True},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_lock_price_above_maximum(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        response = client.patch(
            f"{api_prefix}/chapters/{manga_chapters[0].id}/lock",
            json={"is_locked": True, "unlock_price": 100_001},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_unlock_clears_price(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        """Test making a chapter free drops its price."""
        response = client.patch(
            f"{api_prefix}/chapters/{manga_chapters[1].id}/lock",
            json={"is_locked": False, "unlock_price": 800},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_locked"] is False
        assert data["unlock_price"] is None

    def test_update_keeps_lock(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        response = client.patch(
            f"{api_prefix}/chapters/{manga_chapters[1].id}",
            json={"title": "The Great Pirate Era", "unlock_price": 700},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "The Great Pirate Era"
        assert data["is_locked"] is True
        assert data["unlock_price"] == 700

    def test_update_missing_chapter(self, client: TestClient, api_prefix: str, admin_headers: dict):
        response = client.put(
            f"{api_prefix}/chapters/9999", json={"title": "x"}, headers=admin_headers
        )

        assert response.status_code == 404

    def test_replace_content(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        chapter_id = manga_chapters[0].id
        response = client.post(
            f"{api_prefix}/chapters/{chapter_id}/content",
            json={"images": ["x.jpg", "y.jpg", "z.jpg"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        chapter = client.get(f"{api_prefix}/chapters/{chapter_id}")
        assert chapter.json()["data"]["content"]["pages"] == ["x.jpg", "y.jpg", "z.jpg"]

    def test_replace_content_needs_one_body(self, client: TestClient, api_prefix: str, admin_headers: dict, manga_chapters: List[Chapter]):
        """Test images and html cannot be sent together."""
        response = client.post(
            f"{api_prefix}/chapters/{manga_chapters[0].id}/content",
            json={"images": ["x.jpg"], "html": "<p>x</p>"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_delete_chapter(self, client: TestClient, api_prefix: str, admin_headers: dict, auth_headers: dict, manga_chapters: List[Chapter], db_session: Session):
        """Test deleting a chapter also removes its unlocks."""
        chapter_id = manga_chapters[1].id
        client.post(f"{api_prefix}/chapters/{chapter_id}/unlock", headers=auth_headers)

        response = client.delete(f"{api_prefix}/chapters/{chapter_id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"{api_prefix}/chapters/{chapter_id}").status_code == 404
        assert db_session.query(UnlockedChapter).count() == 0

    def test_delete_chapter_not_admin(self, client: TestClient, api_prefix: str, auth_headers: dict, manga_chapters: List[Chapter]):
        response = client.delete(f"{api_prefix}/chapters/{manga_chapters[0].id}", headers=auth_headers)

        assert response.status_code == 403
