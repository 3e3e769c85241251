"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: utils/publisher.py – фоновая публикация изменений в git.

Назначение модуля:
- Очередь заданий публикации и один фоновый поток-исполнитель.
- Последовательный запуск `git add`, `git commit`, `git push` в рабочем каталоге.
- Запись результата каждого задания в журнал публикаций и в лог приложения.

Запрос пользователя не ждёт завершения публикации; задания выполняются
строго в порядке постановки в очередь.
"""

import logging
import queue
import shlex
import subprocess
from datetime import datetime
from threading import Lock, Thread

from models.log_entry import PublishRecord
from utils.errors import LogWriteError, PublishError
from utils.submission_log import append_log_entry


def run_command(command: list[str], cwd: str, timeout: int) -> subprocess.CompletedProcess:
    """Запускает команду и возбуждает исключение при ненулевом коде возврата."""
    return subprocess.run(
        command,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=True,
    )


class GitPublisher:
    """Очередь публикаций с одним фоновым исполнителем."""

    def __init__(self, runner=None):
        self._runner = runner or run_command
        self._queue: queue.Queue = queue.Queue()
        self._lock = Lock()
        self._thread: Thread | None = None
        self.logger = logging.getLogger(__name__)
        self.enabled = False
        self.repo_dir = "."
        self.commands: list[list[str]] = []
        self.log_file: str | None = None
        self.log_max_entries = 1000
        self.timeout = 120
        self.timestamp_format = "%d.%m.%Y, %H:%M:%S"

    def init_app(self, app):
        """Читает настройки публикации из конфигурации приложения."""
        config = app.config
        self.enabled = config["PUBLISH_ENABLED"]
        self.repo_dir = config["PUBLISH_REPO_DIR"]
        self.commands = config["PUBLISH_COMMANDS"]
        self.log_file = config["PUBLISH_LOG_FILE"]
        self.log_max_entries = config["LOG_MAX_ENTRIES"]
        self.timeout = config["PUBLISH_TIMEOUT_SECONDS"]
        self.timestamp_format = config["TIMESTAMP_FORMAT"]
        self.logger = app.logger
        app.extensions["publisher"] = self
        return self

    def trigger(self, reason: str) -> bool:
        """Ставит задание в очередь и сразу возвращает управление."""
        if not self.enabled:
            self.logger.debug("Публикация отключена, задание пропущено: %s", reason)
            return False

        self._ensure_worker()
        self._queue.put(reason)
        return True

    def join(self):
        """Ожидает выполнения всех заданий очереди."""
        self._queue.join()

    def _ensure_worker(self):
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._thread = Thread(target=self._work, name="git-publisher", daemon=True)
            self._thread.start()

    def _work(self):
        while True:
            reason = self._queue.get()
            try:
                self.publish(reason)
            except Exception:
                self.logger.exception("Критическая ошибка фоновой публикации")
            finally:
                self._queue.task_done()

    def publish(self, reason: str) -> PublishRecord:
        """Выполняет команды публикации синхронно до первой ошибки."""
        executed = []
        output = []
        error = None

        for command in self.commands:
            executed.append(shlex.join(command))
            try:
                result = self._runner(command, cwd=self.repo_dir, timeout=self.timeout)
            except subprocess.CalledProcessError as exc:
                output.append(_collect_output(exc.stdout, exc.stderr))
                error = PublishError(f"Command '{shlex.join(command)}' exited with status {exc.returncode}")
                break
            except (OSError, subprocess.SubprocessError) as exc:
                error = PublishError(f"Command '{shlex.join(command)}' failed: {exc}")
                break
            output.append(_collect_output(result.stdout, result.stderr))

        record = PublishRecord(
            time=datetime.now().strftime(self.timestamp_format),
            status="failed" if error else "ok",
            reason=reason,
            commands=executed,
            error=str(error) if error else None,
            output="\n".join(chunk for chunk in output if chunk),
        )

        if error:
            self.logger.warning("Публикация не выполнена (%s): %s", reason, error)
        else:
            self.logger.info("Публикация выполнена: %s", reason)

        if self.log_file:
            try:
                append_log_entry(self.log_file, record.to_dict(), self.log_max_entries)
            except LogWriteError as exc:
                self.logger.warning("Не удалось записать журнал публикаций: %s", exc)

        return record


def _collect_output(stdout, stderr) -> str:
    parts = [part.strip() for part in (stdout, stderr) if isinstance(part, str) and part.strip()]
    return "\n".join(parts)
