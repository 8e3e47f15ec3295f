# -*- coding: utf-8 -*-
"""
Схемы Pydantic для аутентификации.
"""

from pydantic import BaseModel, EmailStr


class LoginSchema(BaseModel):
    email: EmailStr
    password: str


class TokenSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
