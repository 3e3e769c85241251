"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Чтение переменных окружения (и файла .env) один раз при старте процесса.
- Определение каталогов публичного контента, медиафайлов и журналов.
- Параметры пароля формы, журнала отправок и фоновой публикации в git.
"""

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(BASE_DIR / ".env")


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _get_env_path(name: str, default: Path) -> str:
    """Возвращает абсолютный путь; относительные пути считаются от корня проекта."""
    value = os.environ.get(name, "").strip()
    if not value:
        return str(default)
    path = Path(value)
    if not path.is_absolute():
        path = BASE_DIR / path
    return str(path)


def _is_production() -> bool:
    """Определяет production-режим по FLASK_ENV."""
    return os.environ.get("FLASK_ENV", "").strip().lower() == "production"


def _publish_commands(commit_message: str) -> list[list[str]]:
    """Команды публикации в порядке выполнения."""
    return [
        ["git", "add", "."],
        ["git", "commit", "-m", commit_message],
        ["git", "push"],
    ]


def _required_secret(name: str, fallback: str, production: bool) -> str:
    """Секрет из окружения; в production отсутствие значения считается ошибкой."""
    value = os.environ.get(name)
    if value:
        return value
    if production:
        raise RuntimeError(
            f"{name} environment variable is required in production. "
            "Set it before starting the app."
        )
    warnings.warn(
        f"{name} is not set. Using insecure development fallback value.",
        RuntimeWarning,
        stacklevel=2,
    )
    return fallback


class Config:
    """Базовая конфигурация приложения."""

    _PRODUCTION = _is_production()

    SECRET_KEY = _required_secret("SECRET_KEY", "dev-insecure-secret-key", _PRODUCTION)
    FORM_PASSWORD = _required_secret("FORM_PASSWORD", "changeme", _PRODUCTION)

    HOST = os.environ.get("HOST", "127.0.0.1").strip() or "127.0.0.1"
    PORT = _get_env_int("PORT", 8082)
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    SESSION_COOKIE_SECURE = _get_env_bool("SESSION_COOKIE_SECURE", default=_PRODUCTION)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    CSRF_ENABLED = _get_env_bool("CSRF_ENABLED", default=True)

    # Каталоги контента и журналов
    PUBLIC_DIR = _get_env_path("PUBLIC_DIR", BASE_DIR / "public")
    MEDIA_DIR = _get_env_path("MEDIA_DIR", Path(PUBLIC_DIR) / "media")
    UPLOAD_LOGS_DIR = _get_env_path("UPLOAD_LOGS_DIR", BASE_DIR / "upload_logs")
    LOGS_FILE = _get_env_path("LOGS_FILE", BASE_DIR / "logs" / "logs.json")
    PUBLISH_LOG_FILE = _get_env_path("PUBLISH_LOG_FILE", BASE_DIR / "logs" / "publish.json")
    INDEX_PAGE = os.environ.get("INDEX_PAGE", "index.html").strip() or "index.html"
    MEDIA_URL_PREFIX = "media/"

    MAX_CONTENT_LENGTH = _get_env_int("MAX_CONTENT_LENGTH", 64 * 1024 * 1024)
    HEADING_MAX_LENGTH = 120
    TEXT_MAX_LENGTH = 2000
    SUMMARY_WORDS = 8
    LOG_MAX_ENTRIES = _get_env_int("LOG_MAX_ENTRIES", 1000)
    TIMESTAMP_FORMAT = "%d.%m.%Y, %H:%M:%S"

    SUBMIT_RATE_LIMIT = _get_env_int("SUBMIT_RATE_LIMIT", 20)
    SUBMIT_RATE_WINDOW_SECONDS = _get_env_int("SUBMIT_RATE_WINDOW_SECONDS", 10 * 60)

    # Фоновая публикация (git add / commit / push)
    PUBLISH_ENABLED = _get_env_bool("PUBLISH_ENABLED", default=True)
    PUBLISH_REPO_DIR = _get_env_path("PUBLISH_REPO_DIR", BASE_DIR)
    PUBLISH_COMMIT_MESSAGE = (
        os.environ.get("PUBLISH_COMMIT_MESSAGE", "Auto: content update").strip()
        or "Auto: content update"
    )
    PUBLISH_TIMEOUT_SECONDS = _get_env_int("PUBLISH_TIMEOUT_SECONDS", 120)
    PUBLISH_COMMANDS = _publish_commands(PUBLISH_COMMIT_MESSAGE)
