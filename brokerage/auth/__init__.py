"""
Back-office authentication.
"""

from brokerage.auth.password import verify_password, hash_password
from brokerage.auth.jwt import create_admin_token, read_admin_token
from brokerage.auth.tokens import generate_token
from brokerage.auth.dependencies import get_current_admin_optional, require_admin

__all__ = [
    "verify_password",
    "hash_password",
    "create_admin_token",
    "read_admin_token",
    "generate_token",
    "get_current_admin_optional",
    "require_admin",
]
