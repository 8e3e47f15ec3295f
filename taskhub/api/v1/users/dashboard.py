# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/dashboard.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Сводка для панели управления.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from taskhub.domain.models import User
from taskhub.security.security import get_current_user
from taskhub.service.users import (UserManagementService,
                                   get_user_management_service)
from taskhub.utils.exceptions import UnexpectedError

from .schemas import DashboardSchema, TaskSummarySchema

router = APIRouter(prefix="/users", tags=["📊 Панель управления"])


@router.get("/dashboard", response_model=DashboardSchema)
async def dashboard_endpoint(
    service: UserManagementService = Depends(get_user_management_service),
    current_user: User = Depends(get_current_user),
) -> DashboardSchema:
    """
    Количество пользователей и задач и пять незавершенных задач
    с самыми поздними сроками.
    """
    try:
        summary = await service.dashboard()
        return DashboardSchema(
            users_count=summary["users_count"],
            tasks_count=summary["tasks_count"],
            recent_incomplete_tasks=[
                TaskSummarySchema.model_validate(task)
                for task in summary["recent_incomplete_tasks"]
            ],
        )
    except Exception as e:
        logger.error(f"Ошибка получения сводки: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()
