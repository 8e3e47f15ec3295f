# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/profile.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Обновление профиля и аватара текущего пользователя.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from loguru import logger

from taskhub.domain.models import User
from taskhub.security.security import get_current_user
from taskhub.service.users import (UserManagementService,
                                   get_user_management_service)
from taskhub.utils.exceptions import APIException, UnexpectedError

from .schemas import (AvatarUpdateResponse, MessageResponse,
                      ProfileReadSchema, ProfileUpdateResponse,
                      ProfileUpdateSchema, UserReadSchema)

router = APIRouter(prefix="/users/profile", tags=["👤 Пользователи - ✏️ Профиль"])


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile_endpoint(
    profile_data: ProfileUpdateSchema,
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> ProfileUpdateResponse:
    """
    Обновить профиль текущего пользователя.

    Необязательные ссылки на социальные сети, не переданные в запросе, очищаются.
    """
    try:
        logger.info(f"Обновление профиля пользователя {current_user.id}")
        user = await service.update_profile(current_user, profile_data.model_dump())
        return ProfileUpdateResponse(
            message="Your profile has been updated!",
            user=UserReadSchema.model_validate(user),
        )
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Ошибка обновления профиля {current_user.id}: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()


@router.post("/avatar", response_model=AvatarUpdateResponse)
async def update_avatar_endpoint(
    avatar: UploadFile = File(..., description="Файл изображения"),
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> AvatarUpdateResponse:
    """Загрузить новый аватар, заменив предыдущий."""
    logger.info(
        f"📸 Загрузка аватара: user={current_user.id}, filename={avatar.filename}, "
        f"content_type={avatar.content_type}"
    )
    try:
        content = await avatar.read()
        profile = await service.update_avatar(current_user, avatar.filename, content)
        return AvatarUpdateResponse(
            message="Avatar updated!",
            profile=ProfileReadSchema.model_validate(profile),
        )
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Ошибка загрузки аватара {current_user.id}: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()


@router.delete("/avatar", response_model=MessageResponse)
async def remove_avatar_endpoint(
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Удалить аватар текущего пользователя."""
    try:
        await service.remove_avatar(current_user)
        return MessageResponse(message="Avatar removed!")
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Ошибка удаления аватара {current_user.id}: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()
