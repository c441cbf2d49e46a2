# account_server/models/user.py

import uuid
from sqlalchemy import Boolean, Column, String
from . import Base
from account_server.core.security import verify_password


def _new_id() -> str:
    return uuid.uuid4().hex


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for application users.
    Stores the username, a one-way password hash, the admin flag and the
    most recently issued token.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    token = Column(String, nullable=True)

    def match_password(self, candidate: str) -> bool:
        return verify_password(candidate, self.password_hash)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} admin={self.is_admin}>"
