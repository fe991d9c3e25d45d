import logging
from typing import Optional

from mangaverse.core.exceptions import (
    ChapterAlreadyUnlocked,
    ChapterNotFound,
    ChapterNotPurchasable,
    CompensationFailed,
    DuplicateUnlock,
    InsufficientFunds,
    NotAuthenticated,
)
from mangaverse.models.user import User
from mangaverse.schemas.chapter import UnlockResult
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)


class UnlockService:
    """Spend a user's coins to unlock a chapter."""

    def __init__(self, storage: ReaderStorage):
        self.storage = storage

    def unlock(self, user: Optional[User], chapter_id: int) -> UnlockResult:
        """
        Debit the chapter price and record the unlock.

        Preconditions are checked before any balance change. If the ledger
        insert fails after the debit, the debit is credited back before the
        error propagates.
        """
        storage = self.storage

        if user is None:
            raise NotAuthenticated()

        chapter = storage.get_chapter(chapter_id)
        if chapter is None:
            raise ChapterNotFound(chapter_id)

        price = chapter.unlock_price
        if not chapter.is_locked or not price or price <= 0:
            logger.warning(
                f"User {user.id} tried to unlock non-purchasable chapter {chapter_id}"
            )
            raise ChapterNotPurchasable(chapter_id)

        if storage.has_unlocked(user.id, chapter_id):
            raise ChapterAlreadyUnlocked(chapter_id)

        balance = storage.get_balance(user.id) or 0
        if balance < price:
            logger.warning(
                f"User {user.id} cannot afford chapter {chapter_id}: "
                f"balance={balance}, price={price}"
            )
            raise InsufficientFunds(balance=balance, required=price)

        new_balance = storage.debit_balance(user.id, price)
        if new_balance is None:
            # Balance changed between the check and the guarded update
            storage.rollback()
            current = storage.get_balance(user.id) or 0
            raise InsufficientFunds(balance=current, required=price)

        try:
            unlocked_at = storage.add_unlock(user.id, chapter_id)
        except DuplicateUnlock:
            logger.warning(
                f"Concurrent unlock of chapter {chapter_id} by user {user.id}; refunding"
            )
            self._refund(user.id, chapter_id, price)
            raise ChapterAlreadyUnlocked(chapter_id)
        except Exception:
            logger.exception(
                f"Recording unlock of chapter {chapter_id} for user {user.id} failed; refunding"
            )
            self._refund(user.id, chapter_id, price)
            raise

        storage.commit()
        logger.info(
            f"User {user.id} unlocked chapter {chapter_id} for {price} coins "
            f"(balance {new_balance})"
        )
        return UnlockResult(
            new_balance=new_balance, chapter_id=chapter_id, unlocked_at=unlocked_at
        )

    def _refund(self, user_id: int, chapter_id: int, amount: int) -> None:
        try:
            self.storage.credit_balance(user_id, amount)
            self.storage.commit()
        except Exception as exc:
            logger.critical(
                f"REFUND FAILED: user {user_id} was debited {amount} coins for "
                f"chapter {chapter_id} without an unlock; reconcile manually"
            )
            self.storage.rollback()
            raise CompensationFailed(user_id, chapter_id, amount) from exc
