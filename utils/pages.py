"""
Модуль: `utils/pages.py`.
Назначение: Перечень страниц, доступных для вставки материалов.
"""

import os


def list_target_pages(public_dir: str, index_page: str = "index.html") -> list[str]:
    """Возвращает HTML-файлы каталога публичного контента, кроме главной страницы."""
    if not os.path.isdir(public_dir):
        return []
    return sorted(
        name
        for name in os.listdir(public_dir)
        if name.endswith(".html")
        and name != index_page
        and os.path.isfile(os.path.join(public_dir, name))
    )


def is_target_page(name: str | None, public_dir: str, index_page: str = "index.html") -> bool:
    """Выполняет операцию `is_target_page` в рамках сценария модуля."""
    if not name:
        return False
    return name in list_target_pages(public_dir, index_page)
