# -*- coding: utf-8 -*-
"""
taskhub/api/v1/users/routes.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Основной роутер для всех операций с пользователями.
"""

from fastapi import APIRouter

from . import dashboard, profile
from .crud import delete as crud_delete
from .crud import read as crud_read

router = APIRouter()

# Статические пути регистрируются раньше параметризованного /{user_id}
router.include_router(dashboard.router)
router.include_router(profile.router)
router.include_router(crud_read.router)
router.include_router(crud_delete.router)
