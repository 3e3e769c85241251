"""
Модуль: `utils/errors.py`.
Назначение: Исключения конвейера обработки отправки формы.
"""


class SubmissionError(Exception):
    """Базовая ошибка обработки отправки; текст сообщения попадает в журнал."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class AuthError(SubmissionError):
    """Неверный или отсутствующий пароль формы."""

    status_code = 401


class TargetError(SubmissionError):
    """Целевая страница не входит в список доступных."""

    status_code = 400


class SpliceError(SubmissionError):
    """Ошибка чтения, разбора или записи целевой страницы."""

    status_code = 500


class LogWriteError(SubmissionError):
    """Ошибка записи журнала или снимка отправки; внутренняя, в HTTP-ответ не попадает."""

    status_code = None


class PublishError(SubmissionError):
    """Ошибка внешней команды публикации; внутренняя, пишется только в журнал публикаций."""

    status_code = None
