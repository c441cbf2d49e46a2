# account_server/api/auth.py

import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from account_server.core.deps import bearer_token, get_store, get_token_service
from account_server.core.errors import AccountError, InvalidCredentials, InvalidToken, MissingToken, UserNotFound
from account_server.core.security import TokenService
from account_server.core.store import UserStore
from account_server.models.user import User


logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# Request Schemas
# -------------------------------

class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    is_admin: bool = Field(default=False, alias="isAdmin")

    @field_validator("is_admin", mode="before")
    @classmethod
    def null_is_not_admin(cls, value):
        return False if value is None else value


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


def session_payload(user: User, token: str) -> dict:
    return {
        "_id": user.id,
        "username": user.username,
        "token": token,
        "isAdmin": user.is_admin,
        "hasFound": True,
    }


def start_session(store: UserStore, tokens: TokenService, user: User) -> str:
    """Issues a fresh token and records it as the user's current token."""
    token = tokens.issue(user.id)
    user.token = token
    store.save(user)
    return token


# -------------------------------
# Auth Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    store: UserStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = store.create(req.username, req.password, is_admin=req.is_admin)
    token = start_session(store, tokens, user)
    logger.info("Registered user %s (admin=%s)", user.username, user.is_admin)
    return session_payload(user, token)


@router.post("/login")
def login(
    req: LoginRequest,
    store: UserStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = store.find_by_username(req.username)
    if user is None or not user.match_password(req.password):
        logger.warning("Failed login for username %r", req.username)
        raise InvalidCredentials(hasFound=False)

    token = start_session(store, tokens, user)
    logger.info("User %s logged in", user.username)
    return session_payload(user, token)


@router.post("/logout")
def logout(
    token: str | None = Depends(bearer_token),
    store: UserStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Clears the user's current token.
    The bearer token itself stays valid until it expires.
    """
    if token is None:
        raise MissingToken("No token provided", isLoggedOut=False)

    try:
        user_id = tokens.verify(token)
    except InvalidToken:
        raise InvalidToken("Invalid token", isLoggedOut=False)

    try:
        user = store.find_by_id(user_id)
        if user is None:
            raise UserNotFound(status_code=404, isLoggedOut=False)
        user.token = None
        store.save(user)
    except SQLAlchemyError:
        logger.error("Store failure during logout for user id %s", user_id)
        raise AccountError("Server error", status_code=500, isLoggedOut=False)

    logger.info("User %s logged out", user.username)
    return {"isLoggedOut": True}
