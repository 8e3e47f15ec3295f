# -*- coding: utf-8 -*-
"""
Маршруты FastAPI для аутентификации.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.database_client import get_db
from taskhub.config.logger import configure_logger
from taskhub.domain.enums import UserStatus
from taskhub.domain.models import User
from taskhub.repository.users import get_user_by_email
from taskhub.security.security import (create_access_token, get_current_user,
                                       verify_password)
from taskhub.utils.exceptions import AuthenticationError, PermissionDeniedError

from ..users.schemas import UserReadSchema
from .schemas import LoginSchema, TokenSchema

router = APIRouter(prefix="/auth", tags=["🔐 Аутентификация"])
logger = configure_logger()


@router.post("/login", response_model=TokenSchema, status_code=status.HTTP_200_OK)
async def login(
    credentials: LoginSchema,
    session: AsyncSession = Depends(get_db),
):
    """
    Аутентифицирует пользователя и возвращает JWT-токен.

    Исключения:
        * 401 ― неверные учётные данные.
        * 403 ― пользователь неактивен.
    """
    email = credentials.email.strip()
    user = await get_user_by_email(session, email)
    if not user or not verify_password(credentials.password, user.password):
        logger.warning(f"Неудачная попытка входа: {email}")
        raise AuthenticationError("Invalid credentials.")
    if user.status != UserStatus.ACTIVE:
        logger.warning(f"Неудачная попытка входа: пользователь {email} неактивен")
        raise PermissionDeniedError("Your account is not active.")

    access_token = create_access_token({"sub": str(user.id)})
    logger.info(f"Пользователь {user.email} (ID: {user.id}) успешно авторизовался")
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserReadSchema)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Возвращает данные текущего пользователя вместе с профилем.
    """
    return current_user
