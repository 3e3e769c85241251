"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: utils/uploads.py – приём файлов из формы.

Назначение модуля:
- Генерация уникальных имён файлов (имя + метка времени + случайный суффикс + расширение).
- Сохранение изображений и вложений в каталог медиа без проверки содержимого.
"""

import os
import secrets
import time

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from models.upload import StoredAttachment


def generate_stored_name(original_name: str, now_ms: int | None = None, suffix: str | None = None) -> str:
    """Формирует имя вида `<имя>_<миллисекунды>-<hex>.<расширение>`."""
    safe_name = secure_filename(original_name or "")
    base, ext = os.path.splitext(safe_name)
    if not base:
        base = "file"
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if suffix is None:
        suffix = secrets.token_hex(4)
    return f"{base}_{now_ms}-{suffix}{ext}"


def store_attachments(file_storages: list[FileStorage], media_dir: str) -> list[StoredAttachment]:
    """Сохраняет непустые файлы формы; ошибка файловой системы пробрасывается вызывающему."""
    stored = []
    for file_storage in file_storages:
        # Пустое поле <input type=file> приходит с пустым именем
        if file_storage is None or not file_storage.filename:
            continue

        filename = generate_stored_name(file_storage.filename)
        filepath = os.path.join(media_dir, filename)
        file_storage.save(filepath)
        stored.append(
            StoredAttachment(
                original_name=file_storage.filename,
                filename=filename,
                path=filepath,
            )
        )
    return stored
