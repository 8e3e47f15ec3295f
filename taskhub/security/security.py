# -*- coding: utf-8 -*-
"""security.security
~~~~~~~~~~~~~~~~~~~~
JWT помощники и разрешение текущего пользователя.

Ключевые моменты
================
* Использует *python‑jose* для компактной обработки JWS.
* Экспортирует **create_access_token**, **verify_token** и зависимость FastAPI
  **get_current_user**, которая превращает bearer токен в пользователя из БД.
* Любая проблема с токеном приводит к ``AuthenticationError`` (401).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.database_client import get_db
from taskhub.config.logger import configure_logger
from taskhub.config.settings import settings
from taskhub.domain.models import User
from taskhub.repository.users import get_user_with_profile
from taskhub.utils.exceptions import AuthenticationError

logger = configure_logger()

# Контекст для хэширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# ---------------------------------------------------------------------------
# Пароли
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---------------------------------------------------------------------------
# JWT помощники
# ---------------------------------------------------------------------------


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "token_type": "access"})
    if "sub" in to_encode and not isinstance(to_encode["sub"], str):
        to_encode["sub"] = str(to_encode["sub"])
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        logger.warning(f"Ошибка проверки JWT: {str(exc)}")
        raise AuthenticationError("Token is invalid or expired.") from exc

    if payload.get("token_type") != "access":
        raise AuthenticationError("Token is invalid or expired.")
    return payload


# ---------------------------------------------------------------------------
# Разрешение текущего пользователя
# ---------------------------------------------------------------------------


def _extract_token(request: Request) -> str:
    auth: str | None = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise AuthenticationError("Token not provided.")
    return auth.split(" ", 1)[1]


async def get_current_user(
    request: Request, session: AsyncSession = Depends(get_db)
) -> User:
    """
    Получить текущего пользователя из bearer токена.

    Args:
        request: FastAPI request объект
        session: Сессия базы данных

    Returns:
        Пользователь с загруженным профилем

    Raises:
        AuthenticationError: Если токен отсутствует, недействителен или пользователь удален
    """
    payload = verify_token(_extract_token(request))
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning(f"Неверный payload токена: {payload}")
        raise AuthenticationError("Token is invalid or expired.") from exc

    user = await get_user_with_profile(session, user_id)
    if user is None:
        logger.warning(f"Пользователь {user_id} из токена не найден")
        raise AuthenticationError("User not found.")
    return user
