"""
Модуль: `utils/submission_log.py`.
Назначение: Ограниченный JSON-журнал попыток отправки и снимки последних отправок.
"""

import json
import os

from models.log_entry import UploadSnapshot
from utils.errors import LogWriteError


def read_log(path: str) -> list:
    """Читает журнал; отсутствующий или повреждённый файл считается пустым."""
    try:
        with open(path, encoding="utf-8") as log_file:
            data = json.load(log_file)
    except (OSError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    return data


def append_log_entry(path: str, entry: dict, max_entries: int = 1000) -> list:
    """Добавляет запись в конец журнала и оставляет только последние `max_entries`."""
    entries = read_log(path)
    entries.append(entry)
    if len(entries) > max_entries:
        entries = entries[-max_entries:]

    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as log_file:
            json.dump(entries, log_file, ensure_ascii=False, indent=2)
    except (OSError, TypeError) as exc:
        raise LogWriteError(f"Failed to write log {path}: {exc}") from exc
    return entries


def snapshot_path(directory: str, target: str) -> str:
    """Путь к файлу снимка `<страница>.json`."""
    return os.path.join(directory, f"{os.path.basename(target)}.json")


def write_snapshot(directory: str, snapshot: UploadSnapshot) -> str:
    """Перезаписывает снимок последней отправки для страницы."""
    path = snapshot_path(directory, snapshot.target)
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as snapshot_file:
            json.dump(snapshot.to_dict(), snapshot_file, ensure_ascii=False, indent=2)
    except (OSError, TypeError) as exc:
        raise LogWriteError(f"Failed to write snapshot {path}: {exc}") from exc
    return path
