# account_server/api/routes.py

from fastapi import APIRouter, Depends
from account_server.core.deps import get_current_user, require_admin
from account_server.models.user import User


router = APIRouter()

health_router = APIRouter()


# -------------------------------
# Example Gated Endpoints
# -------------------------------

@router.get("/protected")
def protected(user: User = Depends(get_current_user)):
    return {"message": "This is a protected route, and you are authorized!"}


@router.get("/admin")
def admin(user: User = Depends(require_admin)):
    return {"message": "Welcome to the admin-only route!"}


@health_router.get("/health")
def health():
    return {"status": "ok"}
