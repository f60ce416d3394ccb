"""
Back-office authentication endpoints.
"""

import logging
import secrets
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status, Response
from pydantic import BaseModel

from brokerage.auth.dependencies import require_admin
from brokerage.auth.jwt import create_admin_token
from brokerage.auth.password import verify_password
from brokerage.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


# === Pydantic Schemas ===

class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict


# === Helper Functions ===

def set_auth_cookie(response: Response, access_token: str):
    """Set httpOnly cookie for the session token."""
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        secure=settings.app_env == "production",
        samesite="lax",
        max_age=settings.jwt_access_token_expire_minutes * 60,
    )


def admin_to_dict() -> Dict[str, Any]:
    return {
        "id": "admin",
        "name": "Admin",
        "email": settings.admin_email,
        "role": "admin",
    }


# === Endpoints ===

@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    """
    Authenticate the back-office account and return a JWT.

    Sets an httpOnly cookie for browser-based auth.
    """
    username_ok = secrets.compare_digest(
        request.username.encode(), settings.admin_username.encode()
    )
    if not username_ok or not verify_password(request.password, settings.admin_password):
        logger.info(f"Failed admin login for {request.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    access_token = create_admin_token()
    set_auth_cookie(response, access_token)

    logger.info("Admin logged in")
    return LoginResponse(access_token=access_token, user=admin_to_dict())


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(key="access_token")
    return {"message": "Logged out"}


@router.get("/me")
async def me(admin: Dict[str, Any] = Depends(require_admin)):
    """Return the signed-in account."""
    return admin_to_dict()
