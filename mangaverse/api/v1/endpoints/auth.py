import logging
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from mangaverse.core.auth import create_access_token
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import DuplicateUser
from mangaverse.core.settings import settings
from mangaverse.crud.user import crud_user
from mangaverse.schemas.response import CreateResponse, Messages, SuccessResponse
from mangaverse.schemas.token import Token
from mangaverse.schemas.user import UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(db: Session, login: str, password: str) -> Token:
    user = crud_user.authenticate(db, login=login, password=password)
    if not user:
        logger.warning(f"Failed login attempt for '{login}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=Messages.INCORRECT_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=400, detail=Messages.INACTIVE_USER)

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(user.id, expires_delta=expires)
    return Token(access_token=access_token, expires_in=int(expires.total_seconds()))


@router.post(
    "/register",
    response_model=CreateResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    *,
    db: Session = Depends(get_db),
    user_in: UserCreate,
) -> Any:
    """
    Create new user.
    """
    if crud_user.get_by_email(db, email=user_in.email):
        raise DuplicateUser("email")
    if crud_user.get_by_username(db, username=user_in.username):
        raise DuplicateUser("username")

    user = crud_user.create(db, obj_in=user_in)
    return CreateResponse(message=Messages.REGISTER_SUCCESS, data=user)


@router.post("/login", response_model=SuccessResponse[Token])
def login_for_access_token(
    db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    token = _issue_token(db, form_data.username, form_data.password)
    return SuccessResponse(message=Messages.LOGIN_SUCCESS, data=token)


@router.post("/login-json", response_model=SuccessResponse[Token])
def login_json(
    *,
    db: Session = Depends(get_db),
    credentials: UserLogin,
) -> Any:
    """
    JSON login with username or email.
    """
    token = _issue_token(db, credentials.username, credentials.password)
    return SuccessResponse(message=Messages.LOGIN_SUCCESS, data=token)
