# -*- coding: utf-8 -*-
"""
taskhub/domain/models.py
~~~~~~~~~~~~~~~~~~~~~~~~
ORM модели SQLAlchemy 2.0 для домена TaskHub.

* ``User``    ― учётная запись (email, хэш пароля, статус).
* ``Profile`` ― персональные данные пользователя (1:1 с ``User``).
* ``Task``    ― задача со сроком выполнения; здесь используется только для сводки.
* ``Todo``    ― простая запись списка дел.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from taskhub.domain.enums import Gender, TaskStatus, UserStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Базовый класс для всех моделей."""


class TimestampMixin:
    """Поля created_at / updated_at, заполняемые на стороне приложения."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    profile: Mapped[Optional["Profile"]] = relationship(
        back_populates="user",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tasks: Mapped[List["Task"]] = relationship(
        back_populates="user",
        cascade="all",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date)
    gender: Mapped[Optional[Gender]] = mapped_column(
        Enum(Gender, values_callable=lambda e: [m.value for m in e])
    )
    twitter_profile: Mapped[Optional[str]] = mapped_column(String(255))
    facebook_profile: Mapped[Optional[str]] = mapped_column(String(255))
    google_plus_profile: Mapped[Optional[str]] = mapped_column(String(255))
    # Имя файла относительно каталога аватаров
    avatar: Mapped[Optional[str]] = mapped_column(String(255))

    user: Mapped["User"] = relationship(back_populates="profile")


class Task(TimestampMixin, Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE")
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    due_date: Mapped[Optional[date]] = mapped_column(Date, index=True)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=TaskStatus.INCOMPLETE.value, index=True
    )

    user: Mapped[Optional["User"]] = relationship(back_populates="tasks")


class Todo(TimestampMixin, Base):
    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    todo: Mapped[str] = mapped_column(Text, nullable=False)
