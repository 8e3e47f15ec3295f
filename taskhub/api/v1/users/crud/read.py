# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/crud/read.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Получение списка пользователей с фильтрацией, сортировкой и пагинацией.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from loguru import logger

from taskhub.config.settings import settings
from taskhub.domain.enums import SortOrder, UserSortField, UserStatus
from taskhub.domain.models import User
from taskhub.repository.users import UserListCriteria
from taskhub.security.security import get_current_user
from taskhub.service.users import (UserManagementService,
                                   get_user_management_service)
from taskhub.utils.exceptions import APIException, UnexpectedError

from ..schemas import UserPageSchema, UserReadSchema

router = APIRouter(prefix="/users", tags=["👤 Пользователи - 📖 Чтение"])


@router.get("", response_model=UserPageSchema)
async def list_users_endpoint(
    first_name: Optional[str] = Query(None, description="Поиск по имени"),
    last_name: Optional[str] = Query(None, description="Поиск по фамилии"),
    email: Optional[str] = Query(None, description="Поиск по email"),
    status: Optional[UserStatus] = Query(None, description="Фильтр по статусу"),
    sort_by: UserSortField = Query(
        UserSortField.ID, alias="sortBy", description="Поле сортировки"
    ),
    order: SortOrder = Query(SortOrder.ASC, description="Направление сортировки"),
    page: int = Query(1, ge=1, description="Номер страницы"),
    page_length: int = Query(
        settings.default_page_length,
        alias="pageLength",
        ge=1,
        le=settings.max_page_length,
        description="Размер страницы",
    ),
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> UserPageSchema:
    """
    Получить список пользователей с профилями.

    Фильтры first_name, last_name и email ищут подстроку без учета регистра,
    status сравнивается точно. Все фильтры объединяются через AND.
    """
    criteria = UserListCriteria(
        first_name=first_name,
        last_name=last_name,
        email=email,
        status=status,
        sort_by=sort_by,
        order=order,
        page=page,
        page_length=page_length,
    )
    try:
        logger.info(f"Запрос списка пользователей: {criteria}")
        result = await service.list_users(criteria)
        return UserPageSchema(
            items=[UserReadSchema.model_validate(user) for user in result["items"]],
            total=result["total"],
            page=result["page"],
            page_size=result["page_size"],
        )
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Ошибка получения списка пользователей: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()
