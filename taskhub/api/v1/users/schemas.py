# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/schemas.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Схемы Pydantic для работы с пользователями.
"""

import re
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskhub.domain.enums import Gender, UserStatus

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ProfileReadSchema(BaseModel):
    """Схема для чтения профиля."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    twitter_profile: Optional[str] = None
    facebook_profile: Optional[str] = None
    google_plus_profile: Optional[str] = None
    avatar: Optional[str] = None


class UserReadSchema(BaseModel):
    """Схема для чтения данных пользователя. Пароль никогда не возвращается."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "email": "john@example.com",
                "status": "active",
                "created_at": "2025-06-20T10:30:00",
                "updated_at": "2025-06-20T15:42:00",
                "profile": {
                    "id": 1,
                    "user_id": 1,
                    "first_name": "John",
                    "last_name": "Doe",
                    "date_of_birth": "1990-02-14",
                    "gender": "male",
                    "twitter_profile": None,
                    "facebook_profile": None,
                    "google_plus_profile": None,
                    "avatar": "5f1d7a0c9e8b4a3c.png",
                },
            }
        },
    )

    id: int
    email: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    profile: Optional[ProfileReadSchema] = None


class UserPageSchema(BaseModel):
    """Страница списка пользователей."""

    items: List[UserReadSchema]
    total: int
    page: int
    page_size: int


class ProfileUpdateSchema(BaseModel):
    """Схема для обновления профиля текущего пользователя."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "John",
                "last_name": "Doe",
                "date_of_birth": "1990-02-14",
                "gender": "male",
                "twitter_profile": "https://twitter.com/johndoe",
                "facebook_profile": None,
                "google_plus_profile": None,
            }
        }
    )

    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    date_of_birth: date
    gender: Gender
    twitter_profile: Optional[str] = None
    facebook_profile: Optional[str] = None
    google_plus_profile: Optional[str] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _strict_iso_date(cls, value):
        # Принимаем только YYYY-MM-DD и только существующие календарные даты
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
            raise ValueError("The date of birth does not match the format Y-m-d.")
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise ValueError("The date of birth is not a valid date.") from e


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserReadSchema


class AvatarUpdateResponse(BaseModel):
    message: str
    profile: ProfileReadSchema


class MessageResponse(BaseModel):
    message: str


class TaskSummarySchema(BaseModel):
    """Краткое представление задачи для панели управления."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    title: str
    due_date: Optional[date] = None
    status: int


class DashboardSchema(BaseModel):
    users_count: int
    tasks_count: int
    recent_incomplete_tasks: List[TaskSummarySchema]
