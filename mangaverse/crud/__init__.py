from .catalog import crud_author, crud_genre, crud_translation_group
from .chapter import crud_chapter
from .comment import crud_comment
from .content import crud_content
from .favorite import crud_favorite
from .reading_history import crud_reading_history
from .unlocked_chapter import crud_unlocked_chapter
from .user import crud_user

__all__ = [
    "crud_user",
    "crud_genre",
    "crud_author",
    "crud_translation_group",
    "crud_content",
    "crud_chapter",
    "crud_unlocked_chapter",
    "crud_reading_history",
    "crud_favorite",
    "crud_comment",
]
