# -*- coding: utf-8 -*-
"""
taskhub/domain/enums.py
~~~~~~~~~~~~~~~~~~~~~~~
Определение классов перечислений для домена TaskHub.

Этот модуль содержит все определения перечислений, используемые в приложении:
статусы пользователей и задач, пол в профиле и параметры сортировки списков.
"""

import enum


class UserStatus(str, enum.Enum):
    """Статусы учётной записи пользователя."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Gender(str, enum.Enum):
    """Допустимые значения пола в профиле."""

    MALE = "male"
    FEMALE = "female"


class TaskStatus(int, enum.Enum):
    """Статус выполнения задачи (хранится как целое число)."""

    INCOMPLETE = 0
    COMPLETE = 1


class SortOrder(str, enum.Enum):
    """Направление сортировки."""

    ASC = "asc"
    DESC = "desc"


class UserSortField(str, enum.Enum):
    """Поля, по которым можно сортировать список пользователей."""

    ID = "id"
    EMAIL = "email"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    FIRST_NAME = "first_name"  # Поле профиля
    LAST_NAME = "last_name"  # Поле профиля

    @property
    def is_profile_field(self) -> bool:
        return self in (UserSortField.FIRST_NAME, UserSortField.LAST_NAME)
