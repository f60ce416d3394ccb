"""
FastAPI dependencies for back-office authentication.
"""

from typing import Optional, Dict, Any

from fastapi import Depends, HTTPException, status, Request

from brokerage.auth.jwt import read_admin_token


def get_token_from_request(request: Request) -> Optional[str]:
    """
    Extract JWT token from request.

    Checks in order:
    1. Authorization header (Bearer token)
    2. access_token cookie
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return request.cookies.get("access_token")


async def get_current_admin_optional(request: Request) -> Optional[Dict[str, Any]]:
    """Return the admin token payload if the request carries a valid one."""
    token = get_token_from_request(request)
    if not token:
        return None

    return read_admin_token(token)


async def require_admin(
    admin: Optional[Dict[str, Any]] = Depends(get_current_admin_optional),
) -> Dict[str, Any]:
    """
    Require an authenticated back-office session.

    Raises HTTPException 401 if not authenticated.
    """
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return admin
