from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

# Generic type for data payload
T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response schema with message support"""

    success: bool = True
    message: str
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    meta: Optional[Dict[str, Any]] = None


class SuccessResponse(APIResponse[T]):
    """Success response with data"""

    success: bool = True
    message: str = "Operation completed successfully"
    data: Optional[T] = None
    meta: Optional[Dict[str, Any]] = None


class CreateResponse(APIResponse[T]):
    """Response for create operations"""

    success: bool = True
    message: str = "Created successfully"
    data: Optional[T] = None


class UpdateResponse(APIResponse[T]):
    """Response for update operations"""

    success: bool = True
    message: str = "Updated successfully"
    data: Optional[T] = None


class DeleteResponse(APIResponse[None]):
    """Response for delete operations"""

    success: bool = True
    message: str = "Deleted successfully"
    data: None = None


class ListResponse(APIResponse[List[T]]):
    """Response for list operations"""

    success: bool = True
    message: str = "Data retrieved successfully"
    data: Optional[List[T]] = None
    meta: Optional[Dict[str, Any]] = None


def pagination_meta(total: int, skip: int, limit: int) -> Dict[str, Any]:
    return {
        "total": total,
        "skip": skip,
        "limit": limit,
        "has_more": skip + limit < total,
    }


# Specific success messages for different operations
class Messages:
    # User messages
    USER_CREATED = "User created successfully"
    USER_UPDATED = "User updated successfully"
    USER_DELETED = "User deleted successfully"
    USER_RETRIEVED = "User retrieved successfully"
    USERS_RETRIEVED = "Users retrieved successfully"

    # Content messages
    CONTENT_CREATED = "Content created successfully"
    CONTENT_UPDATED = "Content updated successfully"
    CONTENT_DELETED = "Content deleted successfully"
    CONTENT_RETRIEVED = "Content retrieved successfully"
    CONTENTS_RETRIEVED = "Contents retrieved successfully"

    # Catalog messages
    GENRE_CREATED = "Genre created successfully"
    GENRE_UPDATED = "Genre updated successfully"
    GENRE_DELETED = "Genre deleted successfully"
    GENRES_RETRIEVED = "Genres retrieved successfully"
    AUTHOR_CREATED = "Author created successfully"
    AUTHOR_UPDATED = "Author updated successfully"
    AUTHOR_DELETED = "Author deleted successfully"
    AUTHORS_RETRIEVED = "Authors retrieved successfully"
    TRANSLATION_GROUP_CREATED = "Translation group created successfully"
    TRANSLATION_GROUP_UPDATED = "Translation group updated successfully"
    TRANSLATION_GROUP_DELETED = "Translation group deleted successfully"
    TRANSLATION_GROUPS_RETRIEVED = "Translation groups retrieved successfully"

    # Chapter messages
    CHAPTER_CREATED = "Chapter created successfully"
    CHAPTER_UPDATED = "Chapter updated successfully"
    CHAPTER_DELETED = "Chapter deleted successfully"
    CHAPTER_RETRIEVED = "Chapter retrieved successfully"
    CHAPTER_LOCKED = "Chapter is locked"
    CHAPTER_CONTENT_UPDATED = "Chapter content updated successfully"
    CHAPTER_LOCK_UPDATED = "Chapter lock updated successfully"
    CHAPTER_UNLOCKED = "Chapter unlocked successfully"
    CHAPTERS_RETRIEVED = "Chapters retrieved successfully"
    UNLOCKED_CHAPTERS_RETRIEVED = "Unlocked chapters retrieved successfully"

    # Reading history messages
    READING_HISTORY_RECORDED = "Reading history recorded successfully"
    READING_HISTORY_RETRIEVED = "Reading history retrieved successfully"

    # Favorite messages
    FAVORITE_ADDED = "Content added to favorites successfully"
    FAVORITE_REMOVED = "Content removed from favorites successfully"
    FAVORITES_RETRIEVED = "Favorites retrieved successfully"

    # Comment messages
    COMMENT_CREATED = "Comment created successfully"
    COMMENT_DELETED = "Comment deleted successfully"
    COMMENTS_RETRIEVED = "Comments retrieved successfully"

    # Authentication messages
    LOGIN_SUCCESS = "Login successful"
    REGISTER_SUCCESS = "Registration successful"
    INCORRECT_CREDENTIALS = "Incorrect username or password"
    INACTIVE_USER = "Inactive user"
