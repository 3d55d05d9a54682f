"""Эндпоинты пользователя: логин, регистрация, профиль."""
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends, Response, status

from ..auth import issue_token, verify_credentials
from ..config import Settings
from ..dependencies import get_app_settings, get_current_principal, get_user_repository
from ..fields import Operation, Resource
from ..repositories import UserRepository
from ..schemas import LoginRequest, MessageResponse, Principal, TokenResponse, UserResponse
from ..validation import validate_payload

router = APIRouter(prefix="/api/user", tags=["user"])


def _token_response(principal: Principal, settings: Settings) -> TokenResponse:
    return TokenResponse(
        authToken=issue_token(principal, settings),
        expires_in=int(settings.jwt_expiration.total_seconds()),
    )


@router.post("/login", response_model=TokenResponse)
async def login_user(
    payload: LoginRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """
    Авторизация по логину и паролю, возвращает JWT.

    При неверном пароле/пользователе возвращает 401.
    """
    principal = await verify_credentials(users, payload.username, payload.password)
    await users.record_login(principal.user_id)
    return _token_response(principal, settings)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    principal: Annotated[Principal, Depends(get_current_principal)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """Выпускает новый токен для уже авторизованного пользователя."""
    return _token_response(principal, settings)


@router.post("/create", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    response: Response,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    payload: Dict[str, Any] = Body(...),
) -> UserResponse:
    """
    Регистрирует нового пользователя.

    Возвращает 400 если username или email заняты.
    """
    fields = validate_payload(Resource.USER, Operation.CREATE, payload)
    user = await users.create(fields)
    response.headers["Location"] = f"{router.prefix}/{user.user_id}"
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserResponse:
    return UserResponse.model_validate(await users.get(principal.user_id))


@router.put("/update", response_model=UserResponse)
async def update_user(
    principal: Annotated[Principal, Depends(get_current_principal)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    payload: Dict[str, Any] = Body(...),
) -> UserResponse:
    fields = validate_payload(Resource.USER, Operation.UPDATE, payload)
    user = await users.update(principal.user_id, fields)
    return UserResponse.model_validate(user)


@router.delete("/delete", response_model=MessageResponse)
async def delete_user(
    principal: Annotated[Principal, Depends(get_current_principal)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> MessageResponse:
    await users.delete(principal.user_id)
    return MessageResponse(message="User account deleted.")
