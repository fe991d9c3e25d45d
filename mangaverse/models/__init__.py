from .author import Author
from .chapter import Chapter, ChapterContent
from .comment import Comment
from .content import Content, ContentGenre, ContentStatus, ContentType
from .favorite import UserFavorite
from .genre import Genre
from .reading_history import ReadingHistory
from .translation_group import TranslationGroup
from .unlocked_chapter import UnlockedChapter
from .user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Genre",
    "Author",
    "TranslationGroup",
    "Content",
    "ContentGenre",
    "ContentType",
    "ContentStatus",
    "Chapter",
    "ChapterContent",
    "UnlockedChapter",
    "ReadingHistory",
    "UserFavorite",
    "Comment",
]
