import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_password_hash, verify_password
from mangaverse.crud.base import CRUDBase
from mangaverse.models.user import User, UserRole
from mangaverse.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def get_by_login(self, db: Session, *, login: str) -> Optional[User]:
        """Look a user up by username or email."""
        return (
            db.query(User)
            .filter(or_(User.username == login, User.email == login))
            .first()
        )

    def create(
        self, db: Session, *, obj_in: UserCreate, role: UserRole = UserRole.USER
    ) -> User:
        db_obj = User(
            username=obj_in.username,
            email=obj_in.email,
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            hashed_password=get_password_hash(obj_in.password),
            role=role.value,
            balance=0,
            is_active=True,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"Created user {db_obj.username} (id={db_obj.id})")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: User,
        obj_in: Union[UserUpdate, Dict[str, Any]],
    ) -> User:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        if "password" in update_data:
            update_data["hashed_password"] = get_password_hash(
                update_data.pop("password")
            )
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def authenticate(self, db: Session, *, login: str, password: str) -> Optional[User]:
        user = self.get_by_login(db, login=login)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def get_balance(self, db: Session, *, user_id: int) -> Optional[int]:
        return db.query(User.balance).filter(User.id == user_id).scalar()

    def debit_balance(self, db: Session, *, user_id: int, amount: int) -> Optional[int]:
        """
        Subtract ``amount`` only if the balance covers it.

        Returns the new balance, or None when the guard rejected the update.
        Does not commit.
        """
        result = db.execute(
            update(User)
            .where(User.id == user_id, User.balance >= amount)
            .values(balance=User.balance - amount)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount != 1:
            return None
        return self.get_balance(db, user_id=user_id)

    def credit_balance(self, db: Session, *, user_id: int, amount: int) -> int:
        """Add ``amount`` to the balance. Does not commit."""
        db.execute(
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
            .execution_options(synchronize_session="fetch")
        )
        return self.get_balance(db, user_id=user_id)


crud_user = CRUDUser(User)
