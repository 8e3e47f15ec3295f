# -*- coding: utf-8 -*-
"""
taskhub/repository/users.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Репозиторные функции для работы с пользователями и их профилями.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskhub.domain.enums import SortOrder, UserSortField, UserStatus
from taskhub.domain.models import Profile, User


@dataclass
class UserListCriteria:
    """Параметры фильтрации, сортировки и пагинации списка пользователей."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[UserStatus] = None
    sort_by: UserSortField = UserSortField.ID
    order: SortOrder = SortOrder.ASC
    page: int = 1
    page_length: int = 15

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_length


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, value: str):
    """Регистронезависимый поиск подстроки."""
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def _filtered_users_stmt(criteria: UserListCriteria):
    stmt = select(User).outerjoin(Profile, Profile.user_id == User.id)

    # Все фильтры объединяются через AND, отсутствующий параметр не ограничивает выборку
    if criteria.first_name:
        stmt = stmt.where(_contains(Profile.first_name, criteria.first_name))
    if criteria.last_name:
        stmt = stmt.where(_contains(Profile.last_name, criteria.last_name))
    if criteria.email:
        stmt = stmt.where(_contains(User.email, criteria.email))
    if criteria.status is not None:
        stmt = stmt.where(User.status == criteria.status)
    return stmt


def _sort_column(sort_by: UserSortField):
    if sort_by.is_profile_field:
        return getattr(Profile, sort_by.value)
    return getattr(User, sort_by.value)


async def get_user_with_profile(
    session: AsyncSession, user_id: int
) -> Optional[User]:
    """
    Получить пользователя по ID вместе с профилем.

    Args:
        session: Сессия базы данных
        user_id: ID пользователя

    Returns:
        Пользователь или None
    """
    stmt = select(User).options(selectinload(User.profile)).where(User.id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """
    Получить пользователя по email вместе с профилем.

    Args:
        session: Сессия базы данных
        email: Email пользователя

    Returns:
        Пользователь или None
    """
    stmt = select(User).options(selectinload(User.profile)).where(User.email == email)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_users_filtered(
    session: AsyncSession, criteria: UserListCriteria
) -> Tuple[List[User], int]:
    """
    Получить страницу пользователей с фильтрацией и сортировкой.

    Фильтры по имени и фамилии применяются к полям профиля, по email и
    статусу ― к полям пользователя. Сортировка по first_name / last_name
    выполняется по полю профиля, по остальным полям ― по полю пользователя.

    Args:
        session: Сессия базы данных
        criteria: Параметры выборки

    Returns:
        Кортеж (пользователи на странице, общее количество)
    """
    stmt = _filtered_users_stmt(criteria)

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await session.execute(count_stmt)).scalar() or 0

    column = _sort_column(criteria.sort_by)
    ordering = column.desc() if criteria.order == SortOrder.DESC else column.asc()
    page_stmt = (
        stmt.options(selectinload(User.profile))
        # ID как вторичный ключ делает страницы стабильными
        .order_by(ordering, User.id.asc())
        .offset(criteria.offset)
        .limit(criteria.page_length)
    )
    result = await session.execute(page_stmt)
    return list(result.scalars().all()), total


async def count_users(session: AsyncSession) -> int:
    """Подсчитать общее количество пользователей."""
    result = await session.execute(select(func.count(User.id)))
    return result.scalar() or 0


async def delete_user_repo(session: AsyncSession, user: User) -> None:
    """
    Удалить пользователя навсегда.

    Профиль удаляется каскадно вместе с пользователем.

    Args:
        session: Сессия базы данных
        user: Пользователь с загруженным профилем
    """
    await session.delete(user)
    await session.commit()
