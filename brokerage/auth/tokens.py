"""
Random token generation.

Used for the per-submission links that unlock NDA-gated financials.
"""

import secrets


def generate_token(length: int = 32) -> str:
    """
    Generate a cryptographically secure random token.

    Args:
        length: Number of bytes (token will be 2x this in hex chars)

    Returns:
        Hex-encoded token string
    """
    return secrets.token_hex(length)
