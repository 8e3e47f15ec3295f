# -*- coding: utf-8 -*-
"""
taskhub/utils/image_processor.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Утилита для обработки изображений аватаров.

Проверяет, что загруженные байты являются изображением, и уменьшает его
до заданной ширины с сохранением пропорций.
"""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from taskhub.config.logger import configure_logger
from taskhub.utils.exceptions import ValidationError

logger = configure_logger(prefix="IMAGE_PROCESSOR")

INVALID_IMAGE_MESSAGE = "The avatar must be an image."

# Расширения по формату Pillow, если у исходного файла его нет
FORMAT_EXTENSIONS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "BMP": "bmp",
    "WEBP": "webp",
}

# Поддерживаемые MIME типы по формату Pillow
FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "WEBP": "image/webp",
}

# Многокадровые JPEG (MPO) с камер и телефонов сохраняются как обычный JPEG
FORMAT_ALIASES = {"MPO": "JPEG"}


@dataclass
class ProcessedImage:
    """Результат обработки изображения."""

    content: bytes
    format: str
    width: int
    height: int

    @property
    def content_type(self) -> str:
        return FORMAT_CONTENT_TYPES[self.format]

    @property
    def extension(self) -> str:
        return FORMAT_EXTENSIONS[self.format]


def detect_image_format(data: bytes) -> str:
    """
    Проверяет, что данные являются поддерживаемым изображением.

    Args:
        data: Содержимое загруженного файла

    Returns:
        str: Формат Pillow (JPEG, PNG, ...)

    Raises:
        ValidationError: Если данные не являются изображением
    """
    if not data:
        raise ValidationError(INVALID_IMAGE_MESSAGE)
    try:
        with Image.open(BytesIO(data)) as image:
            image.verify()
            image_format = FORMAT_ALIASES.get(image.format, image.format)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        logger.warning(f"Загруженный файл не является изображением: {e}")
        raise ValidationError(INVALID_IMAGE_MESSAGE) from e

    if image_format not in FORMAT_CONTENT_TYPES:
        logger.warning(f"Неподдерживаемый формат изображения: {image_format}")
        raise ValidationError(INVALID_IMAGE_MESSAGE)
    return image_format


def resize_to_width(data: bytes, max_width: int) -> ProcessedImage:
    """
    Уменьшает изображение до ширины ``max_width`` с сохранением пропорций.

    Высота вычисляется пропорционально. Изображения уже меньше заданной
    ширины не увеличиваются.

    Args:
        data: Содержимое исходного изображения
        max_width: Максимальная ширина в пикселях

    Returns:
        ProcessedImage: Перекодированное изображение в исходном формате
    """
    image_format = detect_image_format(data)

    # После verify() изображение нужно открыть заново
    with Image.open(BytesIO(data)) as image:
        image.load()
        width, height = image.size
        if width > max_width:
            new_height = max(1, round(height * max_width / width))
            image = image.resize((max_width, new_height), Image.Resampling.LANCZOS)
            logger.debug(
                f"Изображение уменьшено: {width}x{height} -> {max_width}x{new_height}"
            )

        output = BytesIO()
        image.save(output, format=image_format)
        result_width, result_height = image.size

    return ProcessedImage(
        content=output.getvalue(),
        format=image_format,
        width=result_width,
        height=result_height,
    )
