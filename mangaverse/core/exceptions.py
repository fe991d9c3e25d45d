from typing import Optional

from fastapi import HTTPException, status


class ContentNotFound(HTTPException):
    def __init__(self, content_id: Optional[int] = None, title: Optional[str] = None):
        if title is not None:
            detail = f"Content '{title}' not found"
        else:
            detail = f"Content with id {content_id} not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        self.content_id = content_id
        self.title = title


class ChapterNotFound(HTTPException):
    def __init__(
        self,
        chapter_id: Optional[int] = None,
        *,
        content_id: Optional[int] = None,
        number: Optional[int] = None,
    ):
        if number is not None:
            detail = f"Chapter {number} not found for content {content_id}"
        else:
            detail = f"Chapter with id {chapter_id} not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        self.chapter_id = chapter_id
        self.content_id = content_id
        self.number = number


class GenreNotFound(HTTPException):
    def __init__(self, genre_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Genre with id {genre_id} not found",
        )


class AuthorNotFound(HTTPException):
    def __init__(self, author_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Author with id {author_id} not found",
        )


class TranslationGroupNotFound(HTTPException):
    def __init__(self, group_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Translation group with id {group_id} not found",
        )


class CommentNotFound(HTTPException):
    def __init__(self, comment_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comment with id {comment_id} not found",
        )


class UserNotFound(HTTPException):
    def __init__(self, user_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with id {user_id} not found",
        )


class NotAuthenticated(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentials(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


class InsufficientPermissions(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )


class DuplicateUser(HTTPException):
    def __init__(self, field: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field.capitalize()} already registered",
        )


class DuplicateGenre(HTTPException):
    def __init__(self, name: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Genre '{name}' already exists",
        )


class InvalidLockState(HTTPException):
    def __init__(self, detail: str = "A locked chapter requires a positive unlock price"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ChapterNotPurchasable(HTTPException):
    def __init__(self, chapter_id: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Chapter {chapter_id} is not purchasable",
        )
        self.chapter_id = chapter_id


class ChapterAlreadyUnlocked(HTTPException):
    def __init__(self, chapter_id: int):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Chapter {chapter_id} is already unlocked",
        )
        self.chapter_id = chapter_id


class InsufficientFunds(HTTPException):
    def __init__(self, balance: int, required: int):
        super().__init__(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={
                "message": "Insufficient balance",
                "balance": balance,
                "required": required,
            },
        )
        self.balance = balance
        self.required = required


class CompensationFailed(HTTPException):
    def __init__(self, user_id: int, chapter_id: int, amount: int):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unlock failed and the refund could not be applied; support has been notified",
        )
        self.user_id = user_id
        self.chapter_id = chapter_id
        self.amount = amount


class DuplicateUnlock(Exception):
    """Raised by a storage when the ledger already holds (user, chapter)."""

    def __init__(self, user_id: int, chapter_id: int):
        super().__init__(f"User {user_id} already unlocked chapter {chapter_id}")
        self.user_id = user_id
        self.chapter_id = chapter_id


class ResourceInUse(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ChapterContentMismatch(HTTPException):
    def __init__(self, chapter_id: int, content_id: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Chapter {chapter_id} does not belong to content {content_id}",
        )
