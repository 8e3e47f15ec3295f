# -*- coding: utf-8 -*-
"""
taskhub/api/v1/todos/routes.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
CRUD операции для записей списка дел.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.clients.database_client import get_db
from taskhub.domain.models import Todo, User
from taskhub.repository.base import create_item, delete_item, list_items
from taskhub.security.security import get_current_user
from taskhub.utils.exceptions import APIException, UnexpectedError

from ..users.schemas import MessageResponse
from .schemas import TodoCreateSchema, TodoReadSchema

router = APIRouter(prefix="/todos", tags=["📝 Список дел"])


@router.get("", response_model=List[TodoReadSchema])
async def list_todos_endpoint(
    skip: int = Query(0, ge=0, description="Количество пропускаемых записей"),
    limit: int = Query(100, ge=1, le=1000, description="Максимальное количество записей"),
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[TodoReadSchema]:
    """Получить записи, начиная с самых новых."""
    try:
        todos = await list_items(session, Todo, skip=skip, limit=limit, newest_first=True)
        return [TodoReadSchema.model_validate(todo) for todo in todos]
    except Exception as e:
        logger.error(f"Ошибка получения списка дел: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()


@router.post("", response_model=TodoReadSchema, status_code=status.HTTP_201_CREATED)
async def create_todo_endpoint(
    todo_data: TodoCreateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TodoReadSchema:
    try:
        todo = await create_item(session, Todo, todo=todo_data.todo)
        logger.info(f"Создана запись списка дел ID: {todo.id}")
        return TodoReadSchema.model_validate(todo)
    except Exception as e:
        logger.error(f"Ошибка создания записи списка дел: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()


@router.delete("/{todo_id}", response_model=MessageResponse)
async def delete_todo_endpoint(
    todo_id: int,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    try:
        await delete_item(session, Todo, todo_id)
        return MessageResponse(message="Todo deleted!")
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Ошибка удаления записи списка дел {todo_id}: {str(e)}")
        logger.exception("Детали ошибки:")
        raise UnexpectedError()
