"""
Модуль: `utils/rate_limit.py`.
Назначение: Ограничение частоты отправок формы с одного адреса (скользящее окно).
"""

import time
from collections import defaultdict, deque
from threading import Lock

from flask import request


class SubmissionRateLimiter:
    """In-memory ограничитель: не более `limit` отправок за `window_seconds` на клиента."""

    def __init__(self, limit: int, window_seconds: int, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits = defaultdict(deque)
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return self.limit > 0 and self.window_seconds > 0

    def hit(self, identity: str) -> bool:
        """Регистрирует попытку; возвращает False, если лимит уже исчерпан."""
        if not self.enabled:
            return True

        now = self._clock()
        with self._lock:
            hits = self._hits[identity]
            while hits and hits[0] <= now - self.window_seconds:
                hits.popleft()
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            return True


def get_client_identifier() -> str:
    """Возвращает IP клиента с учетом X-Forwarded-For."""
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        first_ip = forwarded_for.split(",", 1)[0].strip()
        if first_ip:
            return first_ip
    return request.remote_addr or "unknown"
