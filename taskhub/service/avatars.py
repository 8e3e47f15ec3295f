# -*- coding: utf-8 -*-
"""
taskhub/service/avatars.py
~~~~~~~~~~~~~~~~~~~~~~~~~~
Хранилище аватаров пользователей поверх MinIO.

Файлы лежат в bucket'е изображений под фиксированным префиксом
``settings.avatar_path``; в профиле хранится только имя файла.
"""

import uuid
from pathlib import PurePosixPath

from loguru import logger

from taskhub.clients.minio_client import (delete_file, file_exists,
                                          upload_file_from_bytes)
from taskhub.config.settings import settings


def generate_avatar_filename(original_filename: str | None, fallback_extension: str) -> str:
    """
    Сгенерировать уникальное имя файла аватара, сохранив исходное расширение.

    Args:
        original_filename: Имя файла, присланное клиентом
        fallback_extension: Расширение по формату изображения, если у файла его нет

    Returns:
        Имя файла вида ``<hex>.<ext>``
    """
    suffix = PurePosixPath(original_filename or "").suffix.lstrip(".")
    extension = suffix or fallback_extension
    return f"{uuid.uuid4().hex}.{extension}"


class AvatarStorage:
    """Операции сохранения, проверки и удаления файлов аватаров."""

    def __init__(self, bucket: str | None = None, prefix: str | None = None):
        self.bucket = bucket or settings.minio_images_bucket
        self.prefix = (prefix or settings.avatar_path).strip("/")

    def object_name(self, filename: str) -> str:
        return f"{self.prefix}/{filename}"

    async def exists(self, filename: str) -> bool:
        return await file_exists(self.bucket, self.object_name(filename))

    async def save(self, filename: str, content: bytes, content_type: str) -> None:
        await upload_file_from_bytes(
            bucket=self.bucket,
            object_name=self.object_name(filename),
            file_content=content,
            content_type=content_type,
        )
        logger.info(f"Аватар {filename} сохранен")

    async def delete(self, filename: str) -> None:
        await delete_file(self.bucket, self.object_name(filename))
        logger.info(f"Аватар {filename} удален")

    async def delete_if_exists(self, filename: str | None) -> bool:
        """
        Удалить файл, если он указан и присутствует в хранилище.

        Returns:
            True если файл был удален
        """
        if not filename:
            return False
        if not await self.exists(filename):
            logger.warning(f"Файл аватара {filename} не найден в хранилище")
            return False
        await self.delete(filename)
        return True


def get_avatar_storage() -> AvatarStorage:
    """Зависимость FastAPI, предоставляющая хранилище аватаров."""
    return AvatarStorage()
