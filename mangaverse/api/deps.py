from fastapi import Depends
from sqlalchemy.orm import Session

from mangaverse.core.database import get_db
from mangaverse.storage.base import ReaderStorage
from mangaverse.storage.sql import SQLStorage


def get_storage(db: Session = Depends(get_db)) -> ReaderStorage:
    """Reader storage bound to the request's database session."""
    return SQLStorage(db)
