# account_server/core/errors.py


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing or malformed."""


# -------------------------------
# Request Errors
# -------------------------------

class AccountError(Exception):
    """
    Base class for errors that end the current request.
    Rendered as {"message": ..., **extra} with the given status code.
    """
    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None, status_code: int | None = None, **extra):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"message": self.message, **self.extra}


class InvalidInput(AccountError):
    status_code = 400
    message = "Invalid user data"


class DuplicateUser(AccountError):
    status_code = 400
    message = "User already exists"


class InvalidCredentials(AccountError):
    status_code = 401
    message = "Invalid username or password"


class MissingToken(AccountError):
    status_code = 401
    message = "Not authorized, no token"


class InvalidToken(AccountError):
    status_code = 401
    message = "Not authorized, token failed"


class UserNotFound(AccountError):
    status_code = 401
    message = "User not found"


class NotAdmin(AccountError):
    status_code = 403
    message = "Not authorized as an admin"
