"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: models/upload.py – сохранённое вложение.

Назначение модуля:
- Описание записи о файле, принятом из формы и сохранённом в каталоге медиа.
- Хранение исходного имени, сгенерированного имени и пути на диске.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredAttachment:
    """Класс `StoredAttachment` описывает сущность текущего модуля."""
    original_name: str
    filename: str
    path: str
