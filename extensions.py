"""
Модуль: `extensions.py`.
Назначение: Экземпляры расширений, инициализируемые в фабрике приложения.
"""

from utils.publisher import GitPublisher

# Расширения создаём здесь и инициализируем в фабрике приложения
publisher = GitPublisher()
