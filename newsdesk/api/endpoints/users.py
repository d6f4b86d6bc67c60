from datetime import timedelta
from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends

from ..dependencies import get_app_settings, get_current_user, get_user_repository
from ..schemas import (
    LoginRequest,
    MessageResponse,
    PreferencesResponse,
    PreferencesUpdateRequest,
    SignupRequest,
    TokenResponse,
    load_request,
)
from ...config import Settings
from ...core.security import create_access_token, hash_password, verify_password
from ...exceptions import InternalServiceError, InvalidCredentialsError, NewsdeskError
from ...models.user import UserRecord
from ...repositories.user_repository import UserRepository
from ...utils.validation_utils import (
    normalize_email,
    normalize_preferences,
    validate_preferences_update,
    validate_signup,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


# bcrypt is CPU bound, so signup and login are plain functions run in the threadpool
@router.post("/signup", response_model=MessageResponse)
def signup(
    payload: Any = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    users: UserRepository = Depends(get_user_repository),
):
    request = load_request(SignupRequest, payload)
    validate_signup(request.email, request.password)

    email = normalize_email(request.email)
    try:
        user = UserRecord(
            name=request.name or "",
            email=email,
            password_hash=hash_password(request.password, rounds=settings.bcrypt_rounds),
            preferences=normalize_preferences(request.preferences),
        )
        users.save(user)
    except NewsdeskError:
        raise
    except Exception as e:
        logger.error("signup_failed", email=email, error=str(e), exc_info=e)
        raise InternalServiceError() from e

    logger.info("user_signed_up", email=email)
    return MessageResponse(message="Signup successful")


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Any = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    users: UserRepository = Depends(get_user_repository),
):
    request = load_request(LoginRequest, payload)
    email = normalize_email(request.email)

    try:
        user = users.get(email)
        if not user or not verify_password(request.password or "", user.password_hash):
            logger.info("login_failed", email=email)
            raise InvalidCredentialsError()

        token = create_access_token(
            user.email,
            settings.jwt_secret,
            expires_in=timedelta(seconds=settings.token_ttl_seconds),
            algorithm=settings.jwt_algorithm,
        )
    except NewsdeskError:
        raise
    except Exception as e:
        logger.error("login_error", email=email, error=str(e), exc_info=e)
        raise InternalServiceError() from e

    logger.info("user_logged_in", email=email)
    return TokenResponse(token=token)


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(current_user: UserRecord = Depends(get_current_user)):
    return PreferencesResponse(preferences=current_user.preferences or [])


@router.put("/preferences", response_model=MessageResponse)
async def update_preferences(
    payload: Any = Body(default=None),
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    preferences = validate_preferences_update(load_request(PreferencesUpdateRequest, payload).preferences)

    users.save(current_user.model_copy(update={"preferences": preferences}))
    logger.info("preferences_updated", email=current_user.email, count=len(preferences))
    return MessageResponse(message="Preferences updated")
