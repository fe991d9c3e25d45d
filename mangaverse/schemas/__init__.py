from .catalog import (
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
    GenreCreate,
    GenreResponse,
    GenreUpdate,
    TranslationGroupCreate,
    TranslationGroupResponse,
    TranslationGroupUpdate,
)
from .chapter import (
    ChapterContentReplace,
    ChapterCreate,
    ChapterListItem,
    ChapterLockUpdate,
    ChapterNavigation,
    ChapterResponse,
    ChapterUpdate,
    ChapterView,
    HtmlPayload,
    NavigationLink,
    PagesPayload,
    UnlockedChapterIds,
    UnlockResult,
)
from .comment import CommentCreate, CommentResponse
from .content import (
    ContentCreate,
    ContentDetail,
    ContentResponse,
    ContentTypeResponse,
    ContentUpdate,
)
from .reading import (
    FavoriteResponse,
    FavoriteToggle,
    ReadingHistoryCreate,
    ReadingHistoryResponse,
)
from .response import (
    APIResponse,
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)
from .token import Token
from .user import UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    # Response schemas
    "APIResponse",
    "SuccessResponse",
    "CreateResponse",
    "UpdateResponse",
    "DeleteResponse",
    "ListResponse",
    "Messages",
    # User / auth
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserLogin",
    "Token",
    # Catalog
    "GenreCreate",
    "GenreUpdate",
    "GenreResponse",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "TranslationGroupCreate",
    "TranslationGroupUpdate",
    "TranslationGroupResponse",
    # Content
    "ContentCreate",
    "ContentUpdate",
    "ContentResponse",
    "ContentDetail",
    "ContentTypeResponse",
    # Chapter
    "ChapterCreate",
    "ChapterUpdate",
    "ChapterLockUpdate",
    "ChapterContentReplace",
    "ChapterResponse",
    "ChapterListItem",
    "NavigationLink",
    "ChapterNavigation",
    "HtmlPayload",
    "PagesPayload",
    "ChapterView",
    "UnlockResult",
    "UnlockedChapterIds",
    # Reading / social
    "ReadingHistoryCreate",
    "ReadingHistoryResponse",
    "FavoriteResponse",
    "FavoriteToggle",
    "CommentCreate",
    "CommentResponse",
]
