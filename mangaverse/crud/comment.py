from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from mangaverse.models.comment import Comment


class CRUDComment:
    def get(self, db: Session, id: int) -> Optional[Comment]:
        return db.get(Comment, id)

    def create(
        self,
        db: Session,
        *,
        user_id: int,
        content_id: int,
        chapter_id: Optional[int],
        text: str,
    ) -> Comment:
        db_obj = Comment(
            user_id=user_id, content_id=content_id, chapter_id=chapter_id, text=text
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_content(self, db: Session, *, content_id: int) -> List[Comment]:
        return (
            db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.content_id == content_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def get_by_chapter(self, db: Session, *, chapter_id: int) -> List[Comment]:
        return (
            db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.chapter_id == chapter_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def remove(self, db: Session, *, id: int) -> None:
        obj = db.get(Comment, id)
        if obj is not None:
            db.delete(obj)
            db.commit()


crud_comment = CRUDComment()
