# ==============================================================================
# SECURITY MODULE - Password Hashing & Session Identity
# ==============================================================================
# bcrypt hashing through passlib, session helpers for cookie auth
# ==============================================================================

from __future__ import annotations

from typing import Any, MutableMapping, Optional

from passlib.context import CryptContext

from pawsitiv.core.constants import SecurityConstants


# ==============================================================================
# PASSWORD HASHING
# ==============================================================================

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=10,
)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    Args:
        password: Plaintext password to hash

    Returns:
        Hashed password string safe for storage

    Example:
        >>> hashed = hash_password("cloudstrife")
        >>> verify_password("cloudstrife", hashed)
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against its hash.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


# ==============================================================================
# SESSION IDENTITY
# ==============================================================================

def login_session(session: MutableMapping[str, Any], user_id: str) -> None:
    """Bind a user to the signed session cookie."""
    session.clear()
    session[SecurityConstants.SESSION_USER_KEY] = user_id


def logout_session(session: MutableMapping[str, Any]) -> None:
    session.clear()


def session_user_id(session: MutableMapping[str, Any]) -> Optional[str]:
    """Return the logged-in user id, or None for anonymous sessions."""
    return session.get(SecurityConstants.SESSION_USER_KEY)
