"""
Password hashing and session tokens.

Passwords are hashed with bcrypt. Session tokens are self-contained JWTs
carrying the holder's normalized email; nothing is stored server-side, so a
token stays valid until its ``exp`` claim passes.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from ..exceptions import AuthenticationError

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    email: str,
    secret: str,
    expires_in: timedelta = timedelta(hours=1),
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Verify signature and expiry of a session token and return its email.

    Raises AuthenticationError for any invalid, expired or incomplete token.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError as e:
        raise AuthenticationError() from e

    email = claims.get("email")
    if not isinstance(email, str) or not email:
        raise AuthenticationError()
    return email


def parse_bearer_header(authorization: Optional[str]) -> str:
    """Extract the token from an exact ``Bearer <token>`` header value."""
    if not authorization:
        raise AuthenticationError()

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token or " " in token:
        raise AuthenticationError()
    return token
