# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/crud/delete.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Операции удаления пользователей.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from taskhub.domain.models import User
from taskhub.security.security import get_current_user
from taskhub.service.users import (UserManagementService,
                                   get_user_management_service)
from taskhub.utils.exceptions import APIException, UnexpectedError

from ..schemas import MessageResponse

router = APIRouter(prefix="/users", tags=["👤 Пользователи - 🗑️ Удаление"])


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user_endpoint(
    user_id: int,
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    Удалить пользователя навсегда вместе с профилем и аватаром.

    Raises:
        PolicyError: Если приложение работает в демо-режиме
        NotFoundError: Если пользователь не найден
    """
    try:
        logger.info(f"Пользователь {current_user.id} удаляет пользователя ID: {user_id}")
        await service.delete_user(user_id)
        return MessageResponse(message="User deleted!")
    except APIException as e:
        logger.warning(f"Удаление пользователя {user_id} отклонено: {e.detail}")
        raise
    except Exception as e:
        logger.error(f"Ошибка удаления пользователя {user_id}: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()
