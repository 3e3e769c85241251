"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: models/submission.py – данные одной отправки формы.
"""

from dataclasses import dataclass, field
from enum import Enum


class Position(str, Enum):
    """Место вставки фрагмента в целевую страницу."""

    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, raw_value: str | None) -> "Position":
        """Выполняет операцию `parse` в рамках сценария модуля."""
        # Всё, что не "top", трактуется как вставка в конец
        if (raw_value or "").strip().lower() == cls.TOP.value:
            return cls.TOP
        return cls.BOTTOM


@dataclass
class Submission:
    """Класс `Submission` описывает сущность текущего модуля."""
    heading: str = ""
    text: str = ""
    images: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    target: str = ""
    position: Position = Position.BOTTOM
    password: str = ""

    @property
    def attachments(self) -> list[str]:
        """Все сохранённые файлы отправки: сначала изображения, затем вложения."""
        return [*self.images, *self.files]
