"""
Password checks for the back-office account.

The configured admin password may be stored either as plain text (local
development) or as a bcrypt hash beginning with "$2".
"""

import secrets

import bcrypt


def hash_password(password: str) -> str:
    """Bcrypt-hash a password for use as ADMIN_PASSWORD."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Check a submitted password against the configured one."""
    if stored_password.startswith("$2"):
        try:
            return bcrypt.checkpw(plain_password.encode(), stored_password.encode())
        except ValueError:
            return False
    return secrets.compare_digest(plain_password.encode(), stored_password.encode())
