"""
Back-office session tokens (python-jose, HS256).

A token is accepted only while it is unexpired, carries the admin role and
names the currently configured admin username.
"""

from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from jose import jwt, JWTError

from brokerage.config import get_settings

settings = get_settings()

ADMIN_ROLE = "admin"
TOKEN_TYPE = "access"


def create_admin_token(
    subject: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a session token for the back-office account.

    Args:
        subject: Username to embed; defaults to the configured admin
        expires_delta: Lifetime; defaults to jwt_access_token_expire_minutes
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    claims = {
        "sub": subject or settings.admin_username,
        "role": ADMIN_ROLE,
        "type": TOKEN_TYPE,
        "exp": datetime.utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def read_admin_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid admin session token, or None."""
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    if claims.get("type") != TOKEN_TYPE or claims.get("role") != ADMIN_ROLE:
        return None
    if claims.get("sub") != settings.admin_username:
        return None
    return claims
