from fastapi import APIRouter

from mangaverse.api.v1.endpoints import (
    auth,
    authors,
    chapters,
    comments,
    content,
    favorites,
    genres,
    reading_history,
    translation_groups,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(content.router, prefix="/content", tags=["content"])
api_router.include_router(chapters.router, prefix="/chapters", tags=["chapters"])
api_router.include_router(genres.router, prefix="/genres", tags=["genres"])
api_router.include_router(authors.router, prefix="/authors", tags=["authors"])
api_router.include_router(
    translation_groups.router,
    prefix="/translation-groups",
    tags=["translation-groups"],
)
api_router.include_router(
    reading_history.router, prefix="/reading-history", tags=["reading-history"]
)
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(comments.router, prefix="/comments", tags=["comments"])
