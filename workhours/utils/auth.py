"""Password hashing and JWT access tokens."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from workhours.config import settings


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh bcrypt salt.

    Example:
        >>> hash_password("password123").startswith("$2b$")
        True
    """
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT for a user.

    Args:
        user_id: User ID, stored in the ``sub`` claim
        email: Optional email, stored in the ``email`` claim
        expires_delta: Lifetime of the token (defaults to the configured one)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)

    claims = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    if email:
        claims["email"] = email

    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> str:
    """
    Verify a JWT and return the user ID it was issued for.

    Raises:
        JWTError: If the token is invalid, expired or has no ``sub`` claim
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    user_id = payload.get("sub")
    if user_id is None:
        raise JWTError("Token payload missing 'sub' claim")
    return user_id
