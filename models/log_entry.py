"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: models/log_entry.py – записи журналов.

Назначение модуля:
- LogEntry: запись о попытке отправки в общем ограниченном журнале.
- UploadSnapshot: последний полный снимок отправки для конкретной страницы.
- PublishRecord: результат фоновой публикации в git.
"""

from dataclasses import asdict, dataclass, field

from models.submission import Submission


@dataclass
class LogEntry:
    """Класс `LogEntry` описывает сущность текущего модуля."""
    time: str
    target: str | None
    files: list[str] = field(default_factory=list)
    error: str | None = None
    action: str = "submit"

    @classmethod
    def for_submission(cls, submission: Submission, timestamp: str, error: str | None = None) -> "LogEntry":
        """Запись журнала о попытке отправки."""
        return cls(
            time=timestamp,
            target=submission.target or None,
            files=submission.attachments,
            error=error,
        )

    def to_dict(self) -> dict:
        """Словарь в порядке полей JSON-журнала."""
        return {
            "time": self.time,
            "action": self.action,
            "target": self.target,
            "files": list(self.files),
            "error": self.error,
        }


@dataclass
class UploadSnapshot:
    """Класс `UploadSnapshot` описывает сущность текущего модуля."""
    heading: str
    text: str
    images: list[str]
    files: list[str]
    target: str
    position: str
    timestamp: str

    @classmethod
    def from_submission(cls, submission: Submission, timestamp: str) -> "UploadSnapshot":
        """Снимок полей отправки для страницы `submission.target`."""
        return cls(
            heading=submission.heading,
            text=submission.text,
            images=list(submission.images),
            files=list(submission.files),
            target=submission.target,
            position=submission.position.value,
            timestamp=timestamp,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PublishRecord:
    """Класс `PublishRecord` описывает сущность текущего модуля."""
    time: str
    status: str
    reason: str
    commands: list[str] = field(default_factory=list)
    error: str | None = None
    output: str = ""

    def to_dict(self) -> dict:
        return asdict(self)
