# -*- coding: utf-8 -*-
"""
taskhub/repository/tasks.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Запросы к задачам для сводной панели.
"""

from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.enums import TaskStatus
from taskhub.domain.models import Task


async def count_tasks(session: AsyncSession) -> int:
    """Подсчитать общее количество задач."""
    result = await session.execute(select(func.count(Task.id)))
    return result.scalar() or 0


def recent_incomplete_tasks_stmt(limit: int = 5):
    # Задачи без срока идут последними и на PostgreSQL, и на SQLite
    return (
        select(Task)
        .where(Task.status == TaskStatus.INCOMPLETE.value)
        .order_by(Task.due_date.desc().nulls_last(), Task.id.desc())
        .limit(limit)
    )


async def list_recent_incomplete_tasks(
    session: AsyncSession, limit: int = 5
) -> List[Task]:
    """
    Получить незавершенные задачи с самыми поздними сроками.

    Args:
        session: Сессия базы данных
        limit: Максимальное количество задач

    Returns:
        Задачи, отсортированные по due_date по убыванию, без срока в конце
    """
    result = await session.execute(recent_incomplete_tasks_stmt(limit))
    return list(result.scalars().all())
