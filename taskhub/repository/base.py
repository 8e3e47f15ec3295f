# -*- coding: utf-8 -*-
"""
taskhub/repository/base.py
~~~~~~~~~~~~~~~~~~~~~~~~~~
Base repository operations for generic CRUD functionality.

This module provides reusable asynchronous CRUD helpers using SQLAlchemy 2.0
async ORM, with logging. It is designed to be stateless for unit testing
simplicity.
"""

from __future__ import annotations

from typing import Any, List, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.config.logger import configure_logger
from taskhub.domain.models import Base
from taskhub.utils.exceptions import NotFoundError

T = TypeVar("T", bound=Base)

logger = configure_logger()

# ---------------------------------------------------------------------------
# Generic helpers
# ---------------------------------------------------------------------------


async def get_item(session: AsyncSession, model: Type[T], item_id: int) -> T:
    """Retrieve a single item by ID or raise NotFoundError."""
    stmt = select(model).where(getattr(model, "id") == item_id)
    result = await session.execute(stmt)
    item = result.scalars().first()
    if item is None:
        raise NotFoundError(f"Could not find {model.__name__.lower()}!")
    return item


async def create_item(session: AsyncSession, model: Type[T], **kwargs: Any) -> T:
    """Create a new item in the database."""
    instance = model(**kwargs)
    session.add(instance)
    await session.commit()
    await session.refresh(instance)
    return instance


async def delete_item(session: AsyncSession, model: Type[T], item_id: int) -> None:
    """Delete an item from the database."""
    instance = await get_item(session, model, item_id)
    await session.delete(instance)
    await session.commit()
    logger.info(f"Удален {model.__name__} с ID {item_id}")


async def list_items(
    session: AsyncSession,
    model: Type[T],
    skip: int = 0,
    limit: int = 100,
    newest_first: bool = False,
    **filters,
) -> List[T]:
    """Retrieve a list of items filtered by the given criteria."""
    stmt = select(model).filter_by(**filters)

    if newest_first:
        stmt = stmt.order_by(getattr(model, "id").desc())

    # Применяем пагинацию
    if skip > 0:
        stmt = stmt.offset(skip)
    if limit > 0:
        stmt = stmt.limit(limit)

    result = await session.execute(stmt)
    items = result.scalars().all()
    logger.debug(f"Retrieved {len(items)} {model.__name__} items")
    return list(items)
