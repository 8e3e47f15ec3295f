# -*- coding: utf-8 -*-
"""
taskhub/clients/minio_client.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Инициализация клиента MinIO для работы с S3-совместимым хранилищем.

Аватары пользователей хранятся в bucket'е изображений, а не в локальной
файловой системе.
"""

from io import BytesIO

from minio import Minio
from minio.error import S3Error

from taskhub.config.logger import configure_logger
from taskhub.config.settings import settings

logger = configure_logger(prefix="MINIO_CLIENT")

_client: Minio | None = None

# Коды ошибок S3, означающие отсутствие объекта
_MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchObject", "ResourceNotFound"}


def get_minio() -> Minio:
    """
    Singleton-инициализация клиента MinIO.

    Returns:
        Minio: Экземпляр клиента MinIO.

    Raises:
        Exception: Ошибки подключения к MinIO
    """
    global _client
    if _client is None:
        endpoint = settings.minio_endpoint.replace("http://", "").replace(
            "https://", ""
        )
        _client = Minio(
            endpoint,
            access_key=settings.minio_access_key,
            secret_key=settings.minio_secret_key,
            secure=settings.minio_endpoint.startswith("https"),
            region=settings.minio_region,
        )

        # Автоматическое создание bucket'а если он отсутствует
        if not _client.bucket_exists(settings.minio_images_bucket):
            _client.make_bucket(settings.minio_images_bucket)
    return _client


async def upload_file_from_bytes(
    bucket: str,
    object_name: str,
    file_content: bytes,
    content_type: str = "application/octet-stream",
) -> str:
    """
    Загружает файл из памяти (bytes) в MinIO хранилище.

    Args:
        bucket (str): Имя bucket'а
        object_name (str): Имя объекта в bucket'е
        file_content (bytes): Содержимое файла в виде bytes
        content_type (str): MIME тип файла

    Returns:
        str: URL загруженного файла

    Raises:
        Exception: Ошибки загрузки файла
    """
    try:
        client = get_minio()
        client.put_object(
            bucket,
            object_name,
            BytesIO(file_content),
            length=len(file_content),
            content_type=content_type,
        )

        logger.info(
            f"Файл размером {len(file_content)} байт загружен в {bucket}/{object_name}"
        )
        return f"{settings.minio_endpoint}/{bucket}/{object_name}"
    except Exception as e:
        logger.error(f"Ошибка загрузки файла в {bucket}/{object_name}: {e}")
        raise


async def file_exists(bucket: str, object_name: str) -> bool:
    """
    Проверяет наличие объекта в MinIO хранилище.

    Args:
        bucket (str): Имя bucket'а
        object_name (str): Имя объекта в bucket'е

    Returns:
        bool: True если объект существует

    Raises:
        S3Error: Ошибки хранилища, не связанные с отсутствием объекта
    """
    client = get_minio()
    try:
        client.stat_object(bucket, object_name)
        return True
    except S3Error as e:
        if e.code in _MISSING_OBJECT_CODES:
            return False
        logger.error(f"Ошибка проверки файла {bucket}/{object_name}: {e}")
        raise


async def delete_file(bucket: str, object_name: str) -> None:
    """
    Удаляет файл из MinIO хранилища.

    Args:
        bucket (str): Имя bucket'а
        object_name (str): Имя объекта в bucket'е

    Raises:
        Exception: Ошибки удаления файла
    """
    try:
        client = get_minio()
        client.remove_object(bucket, object_name)
        logger.info(f"Файл {bucket}/{object_name} удален")
    except Exception as e:
        logger.error(f"Ошибка удаления файла {bucket}/{object_name}: {e}")
        raise
