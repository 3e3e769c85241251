"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: routes/submit.py – обработка отправки формы.

Назначение модуля:
- Приём полей и файлов формы, проверка пароля и целевой страницы.
- Сборка фрагмента и вставка его в выбранную страницу.
- Запись журнала попыток и снимка отправки, постановка задания публикации.
"""

import hmac
import os
from datetime import datetime

from flask import current_app, render_template, request

from models.log_entry import LogEntry, UploadSnapshot
from models.submission import Position, Submission
from utils.composer import compose_fragment
from utils.errors import AuthError, LogWriteError, SpliceError, TargetError
from utils.page_splicer import splice_page_file
from utils.pages import is_target_page
from utils.rate_limit import get_client_identifier
from utils.submission_log import append_log_entry, write_snapshot
from utils.uploads import store_attachments


def _form_value(name: str, max_length: int | None = None) -> str:
    """Значение поля формы, обрезанное до `max_length` символов."""
    value = request.form.get(name, "") or ""
    if max_length is not None:
        value = value[:max_length]
    return value


def receive_submission(config) -> Submission:
    """Сохраняет файлы формы в каталог медиа и возвращает разобранную отправку."""
    media_dir = config["MEDIA_DIR"]
    images = store_attachments(request.files.getlist("images"), media_dir)
    files = store_attachments(request.files.getlist("files"), media_dir)

    return Submission(
        heading=_form_value("heading", config["HEADING_MAX_LENGTH"]),
        text=_form_value("text", config["TEXT_MAX_LENGTH"]),
        images=[item.filename for item in images],
        files=[item.filename for item in files],
        target=_form_value("target").strip(),
        position=Position.parse(request.form.get("position")),
        password=_form_value("password"),
    )


def check_password(provided: str, expected: str) -> None:
    """Сравнивает пароль формы с общим секретом за постоянное время."""
    if not provided or not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError("Invalid password")


def check_target(target: str, config) -> None:
    """Проверяет, что страница входит в список доступных для вставки."""
    if not is_target_page(target, config["PUBLIC_DIR"], config["INDEX_PAGE"]):
        raise TargetError("Unknown target page")


def record_attempt(submission: Submission, timestamp: str, error: str | None = None) -> None:
    """Добавляет запись в общий журнал; ошибка записи не влияет на ответ."""
    config = current_app.config
    entry = LogEntry.for_submission(submission, timestamp, error)
    try:
        append_log_entry(config["LOGS_FILE"], entry.to_dict(), config["LOG_MAX_ENTRIES"])
    except LogWriteError as exc:
        current_app.logger.warning("Не удалось записать журнал отправок: %s", exc)


def record_rejected_request(error: str) -> None:
    """Журналирует отправку, отклонённую до разбора формы (CSRF, лимит частоты)."""
    timestamp = datetime.now().strftime(current_app.config["TIMESTAMP_FORMAT"])
    submission = Submission(target=_form_value("target").strip())
    record_attempt(submission, timestamp, error)


def save_snapshot(submission: Submission, timestamp: str) -> None:
    """Сохраняет снимок отправки; ошибка записи только попадает в лог."""
    try:
        write_snapshot(
            current_app.config["UPLOAD_LOGS_DIR"],
            UploadSnapshot.from_submission(submission, timestamp),
        )
    except LogWriteError as exc:
        current_app.logger.warning("Не удалось сохранить снимок отправки: %s", exc)


def register_routes(app):
    """Выполняет операцию `register_routes` в рамках сценария модуля."""

    @app.post("/submit")
    def submit():
        """Обработчик отправки формы."""
        config = current_app.config

        limiter = current_app.extensions.get("rate_limiter")
        if limiter is not None and not limiter.hit(get_client_identifier()):
            current_app.logger.warning("Превышен лимит отправок для %s", get_client_identifier())
            record_rejected_request("Too many submissions")
            return render_template("result.html", error="Too many submissions. Try again later."), 429

        timestamp = datetime.now().strftime(config["TIMESTAMP_FORMAT"])

        # Ошибка файловой системы обрабатывается общим обработчиком 500
        submission = receive_submission(config)

        try:
            check_password(submission.password, config["FORM_PASSWORD"])
            check_target(submission.target, config)
        except (AuthError, TargetError) as exc:
            current_app.logger.warning("Отправка отклонена (%s): %s", submission.target, exc)
            record_attempt(submission, timestamp, str(exc))
            return render_template("result.html", error=f"{exc}."), exc.status_code

        fragment = compose_fragment(
            submission,
            timestamp,
            media_prefix=config["MEDIA_URL_PREFIX"],
            summary_words=config["SUMMARY_WORDS"],
        )

        error = None
        try:
            splice_page_file(
                os.path.join(config["PUBLIC_DIR"], submission.target),
                fragment,
                submission.position,
            )
        except SpliceError as exc:
            current_app.logger.error("Не удалось изменить страницу %s: %s", submission.target, exc)
            error = exc

        save_snapshot(submission, timestamp)
        record_attempt(submission, timestamp, str(error) if error else None)

        if error:
            return render_template("result.html", error=f"Error: {error}"), error.status_code

        current_app.logger.info(
            "Материал добавлен в %s (%s, файлов: %d)",
            submission.target,
            submission.position.value,
            len(submission.attachments),
        )
        publish_triggered = current_app.extensions["publisher"].trigger(
            f"{submission.target} ({submission.position.value})"
        )
        return render_template(
            "result.html",
            target=submission.target,
            publish_triggered=publish_triggered,
        )
