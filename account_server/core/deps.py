# account_server/core/deps.py

import logging
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from account_server.core.errors import MissingToken, NotAdmin, UserNotFound
from account_server.core.security import TokenService
from account_server.core.store import UserStore
from account_server.database import get_db
from account_server.models.user import User


logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def get_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def bearer_token(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str | None:
    """The raw token from an `Authorization: Bearer <token>` header, if any."""
    if creds is None or not creds.credentials:
        return None
    return creds.credentials


# -------------------------------
# Access Gates
# -------------------------------

def get_current_user(
    request: Request,
    token: str | None = Depends(bearer_token),
    store: UserStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    Authenticates the request from its bearer token and attaches the user
    to request.state.user.
    """
    if token is None:
        raise MissingToken()

    user_id = tokens.verify(token)
    user = store.find_by_id(user_id)
    if user is None:
        logger.warning("Token for unknown user id %s", user_id)
        raise UserNotFound()

    request.state.user = user
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise NotAdmin()
    return user
