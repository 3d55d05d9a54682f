"""Утилиты для хеширования паролей и выпуска JWT."""
import time
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping

import jwt
from passlib.context import CryptContext

from .errors import TooLongError

JWT_ALGORITHM = "HS256"
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
    """Возвращает безопасный хеш пароля (bcrypt) с проверкой длины в байтах."""
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise TooLongError("password", BCRYPT_MAX_BYTES)
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Проверяет пароль против хеша."""
    return pwd_context.verify(password, hashed_password)


def burn_password_check() -> None:
    """Тратит время на хеширование, когда пользователь не найден."""
    pwd_context.dummy_verify()


def create_access_token(
    claims: Mapping[str, Any],
    *,
    secret: str,
    expires_in: timedelta,
    now: datetime | None = None,
) -> str:
    """
    Создает JWT токен с переданными claims и полями iat, exp.

    ``iat`` хранится в миллисекундах, ``exp`` в секундах (стандартный claim).
    """
    issued_at = now.timestamp() if now is not None else time.time()
    payload: Dict[str, Any] = dict(claims)
    payload["iat"] = int(issued_at * 1000)
    payload["exp"] = int(issued_at + expires_in.total_seconds())
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, *, secret: str) -> Dict[str, Any]:
    """Декодирует и валидирует JWT, выбрасывает ``jwt.PyJWTError`` при ошибке."""
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        # iat в миллисекундах, стандартная проверка iat его отвергнет
        options={"require": ["exp"], "verify_iat": False},
    )
