# -*- coding: utf-8 -*-
"""
taskhub/config/settings.py
~~~~~~~~~~~~~~~~~~~~~~~~~~
Конфигурация настроек приложения с использованием Pydantic.

Этот модуль загружает конфигурацию из .env файла, предоставляя централизованную
систему управления настройками для всех окружений.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Корневая директория проекта
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Возможные пути к .env файлам
ROOT_ENV_PATH = (BASE_DIR.parent / ".env").resolve()
PROJECT_ENV_PATH = (BASE_DIR / ".env").resolve()


class Settings(BaseSettings):
    """Настройки приложения, загружаемые из .env файла."""

    # Приоритет: 1) переменные окружения, 2) .env проекта, 3) корневой .env
    _env_file = None
    if PROJECT_ENV_PATH.exists():
        _env_file = PROJECT_ENV_PATH
    elif ROOT_ENV_PATH.exists():
        _env_file = ROOT_ENV_PATH

    model_config = SettingsConfigDict(
        env_file=_env_file,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Конфигурация базы данных
    database_url: str | None = None
    postgres_db: str = "taskhub"
    postgres_user: str = "taskhub"
    postgres_password: str = "taskhub"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Конфигурация JWT
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440

    # Конфигурация приложения
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    # Демо-режим: запрещает разрушающие операции
    is_demo: bool = False

    # Конфигурация MinIO
    minio_endpoint: str
    minio_access_key: str
    minio_secret_key: str
    minio_region: str = "us-east-1"
    minio_images_bucket: str = "images"

    # Конфигурация аватаров
    avatar_path: str = "users/avatars"
    avatar_max_width: int = 200

    # Конфигурация пагинации
    default_page_length: int = 15
    max_page_length: int = 100

    # Конфигурация логирования
    log_level: str = "INFO"
    log_file: str | None = None

    # Конфигурация CORS
    cors_allow_origins: str = ""
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
    cors_allow_headers: str = "Authorization,Content-Type"

    def get_allowed_origins(self) -> list[str]:
        """Формирует список разрешённых origins для CORS."""
        if self.cors_allow_origins:
            return [
                origin.strip()
                for origin in self.cors_allow_origins.split(",")
                if origin.strip()
            ]
        return ["*"]

    def get_cors_methods(self) -> list[str]:
        """Возвращает список разрешённых HTTP методов для CORS."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [
            method.strip()
            for method in self.cors_allow_methods.split(",")
            if method.strip()
        ]

    def get_cors_headers(self) -> list[str]:
        """Возвращает список разрешённых заголовков для CORS."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [
            header.strip()
            for header in self.cors_allow_headers.split(",")
            if header.strip()
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Собираем URL базы данных из компонентов, если он не задан напрямую
        if not self.database_url:
            self.database_url = self._build_database_url()

    def _build_database_url(self) -> str:
        """Build database URL from individual components."""
        driver = "postgresql+asyncpg"
        return f"{driver}://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    def get_config_source(self) -> str:
        """Возвращает информацию об источнике конфигурации для отладки."""
        if PROJECT_ENV_PATH.exists():
            return f"project: {PROJECT_ENV_PATH}"
        elif ROOT_ENV_PATH.exists():
            return f"root: {ROOT_ENV_PATH}"
        else:
            return "environment variables only"


settings = Settings()
