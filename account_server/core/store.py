# account_server/core/store.py

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from account_server.core.errors import DuplicateUser
from account_server.core.security import get_password_hash
from account_server.models.user import User


logger = logging.getLogger(__name__)


class UserStore:
    """
    Credential store backed by a SQLAlchemy session.
    The unique index on users.username is the final word on uniqueness;
    the lookup in create() only gives the common case a clean error.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def create(self, username: str, password: str, is_admin: bool = False) -> User:
        if self.find_by_username(username) is not None:
            raise DuplicateUser()

        user = User(
            username=username,
            password_hash=get_password_hash(password),
            is_admin=bool(is_admin),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Concurrent registration lost the race for username %r", username)
            raise DuplicateUser()
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
