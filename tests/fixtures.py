# -*- coding: utf-8 -*-
"""
Фикстуры и хелперы для тестирования управления пользователями
"""

from datetime import date
from io import BytesIO
from typing import Dict, List, Optional

from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.enums import Gender, TaskStatus, UserStatus
from taskhub.domain.models import Profile, Task, User
from taskhub.repository.base import create_item
from taskhub.security.security import create_access_token, hash_password
from taskhub.service.avatars import AvatarStorage

TEST_PASSWORD = "password"


class InMemoryAvatarStorage(AvatarStorage):
    """Хранилище аватаров в памяти вместо MinIO."""

    def __init__(self, fail_on_save: bool = False):
        super().__init__(bucket="images", prefix="users/avatars")
        self.files: Dict[str, bytes] = {}
        self.saved: List[str] = []
        self.deleted: List[str] = []
        self.fail_on_save = fail_on_save

    async def exists(self, filename: str) -> bool:
        return filename in self.files

    async def save(self, filename: str, content: bytes, content_type: str) -> None:
        if self.fail_on_save:
            raise ConnectionError("storage is unavailable")
        self.files[filename] = content
        self.saved.append(filename)

    async def delete(self, filename: str) -> None:
        self.files.pop(filename)
        self.deleted.append(filename)

    @property
    def writes(self) -> int:
        return len(self.saved) + len(self.deleted)


def make_image_bytes(width: int = 400, height: int = 300, image_format: str = "PNG") -> bytes:
    """Сгенерировать изображение заданного размера и формата"""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(120, 40, 200)).save(buffer, format=image_format)
    return buffer.getvalue()


async def create_test_user(
    session: AsyncSession,
    email: str = "john@example.com",
    first_name: Optional[str] = "John",
    last_name: Optional[str] = "Doe",
    status: UserStatus = UserStatus.ACTIVE,
    avatar: Optional[str] = None,
    with_profile: bool = True,
    password: str = TEST_PASSWORD,
) -> User:
    """Создать тестового пользователя с профилем"""
    profile = None
    if with_profile:
        profile = Profile(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date(1990, 1, 15),
            gender=Gender.MALE,
            avatar=avatar,
        )
    return await create_item(
        session,
        User,
        email=email,
        password=hash_password(password),
        status=status,
        profile=profile,
    )


async def create_test_task(
    session: AsyncSession,
    title: str,
    due_date: date,
    status: TaskStatus = TaskStatus.INCOMPLETE,
    user_id: Optional[int] = None,
) -> Task:
    """Создать тестовую задачу"""
    return await create_item(
        session,
        Task,
        title=title,
        due_date=due_date,
        status=status.value,
        user_id=user_id,
    )


def auth_headers(user: User) -> Dict[str, str]:
    """Заголовок авторизации с действующим токеном пользователя"""
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}
