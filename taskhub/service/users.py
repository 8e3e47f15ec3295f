# -*- coding: utf-8 -*-
"""
taskhub/service/users.py
~~~~~~~~~~~~~~~~~~~~~~~~
Сервисный слой управления пользователями.

Операции: список пользователей, обновление профиля, загрузка и удаление
аватара, удаление пользователя и сводка для панели управления.
Ожидаемые отказы выражаются исключениями из ``taskhub.utils.exceptions``;
перевод прочих ошибок в обобщённый ответ выполняет слой API.
"""

from typing import Any, Dict, Optional

from fastapi import Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.database_client import get_db
from taskhub.config.settings import settings
from taskhub.domain.models import Profile, User
from taskhub.repository.tasks import count_tasks, list_recent_incomplete_tasks
from taskhub.repository.users import (UserListCriteria, count_users,
                                      delete_user_repo, get_user_with_profile,
                                      list_users_filtered)
from taskhub.service.avatars import (AvatarStorage, generate_avatar_filename,
                                     get_avatar_storage)
from taskhub.utils.exceptions import NotFoundError, PolicyError, ValidationError
from taskhub.utils.image_processor import resize_to_width

# Поля профиля, перезаписываемые при обновлении
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "date_of_birth",
    "gender",
    "twitter_profile",
    "facebook_profile",
    "google_plus_profile",
)

RECENT_TASKS_LIMIT = 5


class UserManagementService:
    """Операции управления пользователями поверх БД и хранилища аватаров."""

    def __init__(
        self,
        session: AsyncSession,
        avatars: AvatarStorage,
        is_demo: bool = False,
        avatar_max_width: int = 200,
    ):
        self.session = session
        self.avatars = avatars
        self.is_demo = is_demo
        self.avatar_max_width = avatar_max_width

    async def list_users(self, criteria: UserListCriteria) -> Dict[str, Any]:
        """
        Получить страницу пользователей с профилями.

        Returns:
            Словарь с ключами items, total, page, page_size
        """
        users, total = await list_users_filtered(self.session, criteria)
        logger.debug(f"Найдено пользователей: {total}, на странице: {len(users)}")
        return {
            "items": users,
            "total": total,
            "page": criteria.page,
            "page_size": criteria.page_length,
        }

    async def update_profile(self, user: User, profile_data: Dict[str, Any]) -> User:
        """
        Перезаписать поля профиля текущего пользователя.

        Необязательные поля, отсутствующие в ``profile_data``, очищаются.
        """
        profile = self._require_profile(user)
        for field in PROFILE_FIELDS:
            setattr(profile, field, profile_data.get(field))

        await self.session.commit()
        logger.info(f"Профиль пользователя {user.id} обновлен")
        return user

    async def update_avatar(
        self, user: User, original_filename: Optional[str], content: bytes
    ) -> Profile:
        """
        Заменить аватар текущего пользователя.

        Изображение проверяется и уменьшается в памяти до записи в хранилище,
        поэтому невалидный файл не вызывает никаких изменений. Старый файл
        удаляется до сохранения нового. Если сохранение нового файла не удалось
        после удаления старого, ссылка в профиле очищается.
        """
        image = resize_to_width(content, self.avatar_max_width)
        profile = self._require_profile(user)

        old_deleted = await self.avatars.delete_if_exists(profile.avatar)
        filename = generate_avatar_filename(original_filename, image.extension)
        try:
            await self.avatars.save(filename, image.content, image.content_type)
        except Exception:
            if old_deleted:
                logger.warning(
                    f"Новый аватар пользователя {user.id} не сохранен, ссылка на удаленный файл очищена"
                )
                profile.avatar = None
                await self.session.commit()
            raise

        profile.avatar = filename
        try:
            await self.session.commit()
        except Exception:
            logger.error(f"Ссылка на аватар {filename} не сохранена, файл удаляется")
            await self.avatars.delete_if_exists(filename)
            raise
        logger.info(f"Аватар пользователя {user.id} обновлен: {filename}")
        return profile

    async def remove_avatar(self, user: User) -> None:
        profile = self._require_profile(user)
        if not profile.avatar:
            raise ValidationError("No avatar uploaded!")

        await self.avatars.delete_if_exists(profile.avatar)
        profile.avatar = None
        await self.session.commit()
        logger.info(f"Аватар пользователя {user.id} удален")

    async def delete_user(self, user_id: int) -> None:
        """
        Удалить пользователя вместе с профилем и файлом аватара.

        Raises:
            PolicyError: В демо-режиме, независимо от user_id
            NotFoundError: Если пользователь не найден
        """
        if self.is_demo:
            raise PolicyError()

        user = await get_user_with_profile(self.session, user_id)
        if user is None:
            raise NotFoundError("Could not find user!")

        if user.profile is not None:
            await self.avatars.delete_if_exists(user.profile.avatar)

        await delete_user_repo(self.session, user)
        logger.info(f"Пользователь с ID {user_id} удален")

    async def dashboard(self) -> Dict[str, Any]:
        return {
            "users_count": await count_users(self.session),
            "tasks_count": await count_tasks(self.session),
            "recent_incomplete_tasks": await list_recent_incomplete_tasks(
                self.session, limit=RECENT_TASKS_LIMIT
            ),
        }

    @staticmethod
    def _require_profile(user: User) -> Profile:
        if user.profile is None:
            logger.warning(f"У пользователя {user.id} нет профиля")
            raise NotFoundError("Could not find profile!")
        return user.profile


def get_demo_mode() -> bool:
    """Зависимость FastAPI с флагом демо-режима."""
    return settings.is_demo


def get_user_management_service(
    session: AsyncSession = Depends(get_db),
    avatars: AvatarStorage = Depends(get_avatar_storage),
    is_demo: bool = Depends(get_demo_mode),
) -> UserManagementService:
    """Зависимость FastAPI, собирающая сервис управления пользователями."""
    return UserManagementService(
        session=session,
        avatars=avatars,
        is_demo=is_demo,
        avatar_max_width=settings.avatar_max_width,
    )
