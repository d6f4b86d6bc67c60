from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, field_validator

from ..utils.validation_utils import coerce_text

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def load_request(model: Type[RequestModel], payload: Any) -> RequestModel:
    """Build a request model; a missing or non-object body counts as ``{}``."""
    if isinstance(payload, dict):
        return model.model_validate(payload)
    return model()


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    # Kept only when it is a list of strings
    preferences: Any = None

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def coerce_fields(cls, value):
        return coerce_text(value)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def coerce_fields(cls, value):
        return coerce_text(value)


class PreferencesUpdateRequest(BaseModel):
    preferences: Any = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class PreferencesResponse(BaseModel):
    preferences: List[Any]


class HealthResponse(BaseModel):
    status: str
