import re
from typing import Any, List, Optional

from ..exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    return (email or "").lower()


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_signup(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")

    if not is_valid_email(email):
        raise ValidationError("Invalid email")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password too short")


def normalize_preferences(preferences: Any) -> List[str]:
    if isinstance(preferences, list) and all(isinstance(item, str) for item in preferences):
        return list(preferences)
    return []


def validate_preferences_update(preferences: Any) -> list:
    if not isinstance(preferences, list):
        raise ValidationError("preferences must be an array")
    return list(preferences)


def coerce_text(value: Any) -> Optional[str]:
    """Turn a JSON scalar into text; falsy scalars count as absent."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, (int, float)):
        if value == 0:
            return None
        return str(int(value)) if float(value).is_integer() else str(value)
    return str(value)
