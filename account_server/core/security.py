# account_server/core/security.py

import logging
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext

from account_server.core.errors import ConfigError, InvalidToken


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# -------------------------------
# Passwords
# -------------------------------

def get_password_hash(password: str) -> str:
    if not password:
        raise ValueError("password must not be blank")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognized or corrupt hash
        return False


# -------------------------------
# Token Service
# -------------------------------

class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens carrying a user id.
    Verification is stateless: only the signature and expiry are checked.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24 * 30):
        if not secret:
            raise ConfigError("token secret must not be blank")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=max(1, int(expire_minutes)))

    def issue(self, user_id: str, expires_delta: timedelta | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.expires_delta)
        to_encode = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Returns the user id carried by the token, or raises InvalidToken."""
        if not token:
            raise InvalidToken()
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise InvalidToken()
        except JWTError:
            logger.warning("Rejected malformed or badly signed token")
            raise InvalidToken()

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidToken()
        return user_id
