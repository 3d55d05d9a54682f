"""
Проверка логина/пароля и выпуск/проверка bearer-токенов.

Любой отказ наружу выглядит одинаково (401 Unauthorized), настоящая
причина пишется только в лог.
"""
import logging
from datetime import datetime

import jwt

from .config import Settings
from .db.models import User
from .errors import InvalidCredentialsError, UnauthorizedError
from .repositories import UserRepository
from .schemas import Principal
from .security import burn_password_check, create_access_token, decode_token, verify_password

logger = logging.getLogger(__name__)


def principal_from_user(user: User) -> Principal:
    """Собирает принципала по актуальной записи пользователя."""
    return Principal(
        user_id=user.user_id,
        username=user.username,
        email=user.email,
        name=user.name,
        onboarding=user.onboarding,
        selected_vehicle_id=user.selected_vehicle_id,
    )


async def verify_credentials(users: UserRepository, username: str, password: str) -> Principal:
    """
    Проверяет пару логин/пароль.

    Неизвестный пользователь и неверный пароль дают одну и ту же ошибку
    ``InvalidCredentialsError``, чтобы по ответу нельзя было перебирать
    имена пользователей.
    """
    user = await users.find_credential_by_username(username)
    if user is None:
        burn_password_check()
        logger.warning("auth.login_rejected username=%r reason=unknown_user", username)
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning("auth.login_rejected username=%r reason=bad_password", username)
        raise InvalidCredentialsError()

    logger.info("auth.login_accepted user_id=%s", user.user_id)
    return Principal(user_id=user.user_id, username=user.username, email=user.email)


def issue_token(principal: Principal, settings: Settings, now: datetime | None = None) -> str:
    """Выпускает JWT с полями принципала, iat и exp по настройке JWT_EXPIRATION."""
    return create_access_token(
        principal.model_dump(exclude_none=True),
        secret=settings.jwt_secret,
        expires_in=settings.jwt_expiration,
        now=now,
    )


async def verify_token(users: UserRepository, token: str, settings: Settings) -> Principal:
    """
    Проверяет подпись и срок действия токена и что аккаунт еще существует.

    Возвращает принципала, собранного заново по записи из БД, а не по
    claims из токена.
    """
    try:
        claims = decode_token(token, secret=settings.jwt_secret)
    except jwt.PyJWTError as exc:
        logger.warning("auth.token_rejected reason=invalid_token error=%s", type(exc).__name__)
        raise UnauthorizedError() from None

    user_id = claims.get("user_id")
    username = claims.get("username")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(username, str):
        logger.warning("auth.token_rejected reason=invalid_claims")
        raise UnauthorizedError()

    user = await users.get_by_identity(user_id, username)
    if user is None:
        logger.warning("auth.token_rejected user_id=%s reason=account_missing", user_id)
        raise UnauthorizedError()
    return principal_from_user(user)
