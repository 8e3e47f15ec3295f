# -*- coding: utf-8 -*-
"""
Этот модуль определяет пользовательские исключения для API TaskHub.
Эти исключения используются для обработки общих сценариев ошибок с соответствующими HTTP статус-кодами и сообщениями.
"""

from enum import Enum

from fastapi import HTTPException, status

GENERIC_ERROR_MESSAGE = "Sorry, something went wrong!"


class ErrorCode(str, Enum):
    """Перечисление для уникальных кодов ошибок."""

    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    POLICY_ERROR = "POLICY_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class APIException(HTTPException):
    """Базовый класс для пользовательских исключений API."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str,
        headers: dict | None = None,
    ):
        """
        Инициализирует APIException с кодом статуса, деталями и кодом ошибки.

        Args:
            status_code (int): HTTP код статуса.
            detail (str): Сообщение об ошибке.
            error_code (str): Уникальный код ошибки.
            headers (dict, optional): Дополнительные заголовки.
        """
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Вызывается, когда входные данные недействительны."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=ErrorCode.VALIDATION_ERROR,
        )


class AuthenticationError(APIException):
    """Вызывается, когда токен отсутствует, недействителен или истёк."""

    def __init__(self, detail: str = "Unauthenticated."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=ErrorCode.AUTHENTICATION_ERROR,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(APIException):
    """Вызывается, когда ресурс не найден."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=ErrorCode.NOT_FOUND,
        )


class PermissionDeniedError(APIException):
    """Вызывается, когда у пользователя недостаточно прав."""

    def __init__(self, detail: str = "Permission denied."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=ErrorCode.PERMISSION_DENIED,
        )


class PolicyError(APIException):
    """Вызывается при статическом запрете операции (например, в демо-режиме)."""

    def __init__(
        self, detail: str = "You are not allowed to perform this action in this mode."
    ):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=ErrorCode.POLICY_ERROR,
        )


class UnexpectedError(APIException):
    """
    Обобщённая ошибка для всех непредвиденных сбоев.

    Текст исходного исключения только логируется и никогда не возвращается клиенту.
    """

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=GENERIC_ERROR_MESSAGE,
            error_code=ErrorCode.UNEXPECTED_ERROR,
        )
