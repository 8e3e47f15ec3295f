# -*- coding: utf-8 -*-
"""
Схемы Pydantic для записей списка дел.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TodoCreateSchema(BaseModel):
    todo: str = Field(min_length=1)


class TodoReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    todo: str
    created_at: datetime
    updated_at: datetime
