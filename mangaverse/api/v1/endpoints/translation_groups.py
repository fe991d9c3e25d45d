import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_admin_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import TranslationGroupNotFound
from mangaverse.crud.catalog import crud_translation_group
from mangaverse.models.user import User
from mangaverse.schemas.catalog import (
    TranslationGroupCreate,
    TranslationGroupResponse,
    TranslationGroupUpdate,
)
from mangaverse.schemas.response import (
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ListResponse[TranslationGroupResponse])
def read_translation_groups(db: Session = Depends(get_db)) -> Any:
    groups = crud_translation_group.get_multi(db, limit=1000)
    return ListResponse(message=Messages.TRANSLATION_GROUPS_RETRIEVED, data=groups)


@router.get("/{group_id}", response_model=SuccessResponse[TranslationGroupResponse])
def read_translation_group(group_id: int, db: Session = Depends(get_db)) -> Any:
    group = crud_translation_group.get(db, id=group_id)
    if not group:
        raise TranslationGroupNotFound(group_id)
    return SuccessResponse(data=group)


@router.post(
    "",
    response_model=CreateResponse[TranslationGroupResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_translation_group(
    *,
    db: Session = Depends(get_db),
    group_in: TranslationGroupCreate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Create new translation group (Admin only).
    """
    group = crud_translation_group.create(db, obj_in=group_in)
    return CreateResponse(message=Messages.TRANSLATION_GROUP_CREATED, data=group)


@router.put("/{group_id}", response_model=UpdateResponse[TranslationGroupResponse])
@router.patch("/{group_id}", response_model=UpdateResponse[TranslationGroupResponse])
def update_translation_group(
    *,
    db: Session = Depends(get_db),
    group_id: int,
    group_in: TranslationGroupUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    group = crud_translation_group.get(db, id=group_id)
    if not group:
        raise TranslationGroupNotFound(group_id)
    group = crud_translation_group.update(db, db_obj=group, obj_in=group_in)
    return UpdateResponse(message=Messages.TRANSLATION_GROUP_UPDATED, data=group)


@router.delete("/{group_id}", response_model=DeleteResponse)
def delete_translation_group(
    *,
    db: Session = Depends(get_db),
    group_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a translation group; its contents keep existing without one
    (Admin only).
    """
    group = crud_translation_group.get(db, id=group_id)
    if not group:
        raise TranslationGroupNotFound(group_id)
    crud_translation_group.remove(db, id=group_id)
    logger.info(f"Admin {current_user.id} deleted translation group {group_id}")
    return DeleteResponse(message=Messages.TRANSLATION_GROUP_DELETED)
