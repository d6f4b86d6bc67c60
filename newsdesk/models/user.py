from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """Stored user. Immutable; updates go through ``model_copy`` and a repository save."""

    model_config = ConfigDict(frozen=True)

    email: str
    password_hash: str
    name: str = ""
    preferences: List[Any] = Field(default_factory=list)
