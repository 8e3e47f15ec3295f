#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Скрипт для создания пользователя с профилем.

Используется для инициализации системы: операции управления пользователями
предполагают, что у каждого пользователя уже есть профиль.

Пример:
    python scripts/create_user.py admin@example.com secret --first-name Admin --last-name User
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Добавляем корень проекта в sys.path
sys.path.append(str(Path(__file__).parent.parent))

from taskhub.clients.database_client import AsyncSessionLocal, init_db  # noqa: E402
from taskhub.domain.enums import UserStatus  # noqa: E402
from taskhub.domain.models import Profile, User  # noqa: E402
from taskhub.repository.users import get_user_by_email  # noqa: E402
from taskhub.security.security import hash_password  # noqa: E402


async def create_user(email: str, password: str, first_name: str, last_name: str) -> None:
    """Создает пользователя и пустой профиль, если email еще не занят."""
    await init_db()
    async with AsyncSessionLocal() as session:
        if await get_user_by_email(session, email):
            print(f"✅ Пользователь {email} уже существует.")
            return

        user = User(
            email=email,
            password=hash_password(password),
            status=UserStatus.ACTIVE,
            profile=Profile(first_name=first_name, last_name=last_name),
        )
        session.add(user)
        await session.commit()
        print(f"✅ Пользователь {email} успешно создан (ID: {user.id})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Создание пользователя TaskHub")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    try:
        asyncio.run(
            create_user(args.email, args.password, args.first_name, args.last_name)
        )
    except Exception as e:
        print(f"❌ Ошибка при создании пользователя {args.email}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
