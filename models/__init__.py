"""
Модуль: `models/__init__.py`.
Назначение: Экспорт структур данных отправки, вложений и журналов.
"""

from .submission import Position, Submission
from .upload import StoredAttachment
from .log_entry import LogEntry, PublishRecord, UploadSnapshot

__all__ = ["Position", "Submission", "StoredAttachment", "LogEntry", "UploadSnapshot", "PublishRecord"]
