import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from mangaverse.models.favorite import UserFavorite

logger = logging.getLogger(__name__)


class CRUDFavorite:
    def get(self, db: Session, *, user_id: int, content_id: int) -> Optional[UserFavorite]:
        return db.get(UserFavorite, (user_id, content_id))

    def get_by_user(self, db: Session, *, user_id: int) -> List[UserFavorite]:
        return (
            db.query(UserFavorite)
            .options(joinedload(UserFavorite.content))
            .filter(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at.desc())
            .all()
        )

    def toggle(self, db: Session, *, user_id: int, content_id: int) -> bool:
        """Add or remove a favorite. Returns True when it was added."""
        existing = self.get(db, user_id=user_id, content_id=content_id)
        if existing:
            db.delete(existing)
            db.commit()
            logger.info(f"User {user_id} removed content {content_id} from favorites")
            return False

        db.add(UserFavorite(user_id=user_id, content_id=content_id))
        db.commit()
        logger.info(f"User {user_id} added content {content_id} to favorites")
        return True


crud_favorite = CRUDFavorite()
