"""
Название: «PageDrop»
Дата и номер версии: 2026-10-19 v1.0
Язык: Python (Flask)
Краткое описание: веб-форма, которая добавляет раскрывающиеся блоки с текстом,
изображениями и файлами на статические HTML-страницы и публикует изменения в git
"""

import hmac
import logging
import os
import secrets

from flask import Flask, render_template, request, session

from config import Config
from extensions import publisher
from routes.pages import register_routes as register_page_routes
from routes.submit import record_rejected_request, register_routes as register_submit_routes
from utils.rate_limit import SubmissionRateLimiter


def create_app(config_object=Config) -> Flask:
    """Фабрика приложения, собирающая все модули воедино."""
    # Публичный каталог отдаётся собственными маршрутами
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    publisher.init_app(app)
    app.extensions["rate_limiter"] = SubmissionRateLimiter(
        app.config["SUBMIT_RATE_LIMIT"],
        app.config["SUBMIT_RATE_WINDOW_SECONDS"],
    )

    # Гарантируем наличие служебных директорий
    for directory in (
        app.config["PUBLIC_DIR"],
        app.config["MEDIA_DIR"],
        app.config["UPLOAD_LOGS_DIR"],
        os.path.dirname(app.config["LOGS_FILE"]),
        os.path.dirname(app.config["PUBLISH_LOG_FILE"]),
    ):
        os.makedirs(directory, exist_ok=True)

    # Регистрация роутов по модулям
    register_submit_routes(app)
    register_page_routes(app)

    def _ensure_csrf_token() -> str:
        token = session.get("csrf_token")
        if not token:
            token = secrets.token_urlsafe(32)
            session["csrf_token"] = token
        return token

    def _is_csrf_valid() -> bool:
        expected = session.get("csrf_token")
        provided = request.headers.get("X-CSRF-Token") or request.form.get("csrf_token")
        if not expected or not provided:
            return False
        return hmac.compare_digest(expected, provided)

    @app.context_processor
    def inject_template_globals():
        """Выполняет операцию `inject_template_globals` в рамках сценария модуля."""
        return {"csrf_token": _ensure_csrf_token()}

    @app.before_request
    def enforce_csrf():
        """Выполняет операцию `enforce_csrf` в рамках сценария модуля."""
        if not app.config["CSRF_ENABLED"]:
            return None

        if request.method in {"GET", "HEAD", "OPTIONS", "TRACE"}:
            return None

        if _is_csrf_valid():
            return None

        app.logger.warning("Отклонена отправка с недействительным CSRF-токеном")
        record_rejected_request("Invalid CSRF token")
        return (
            render_template(
                "result.html",
                error="Form session expired. Reload the page and try again.",
            ),
            400,
        )

    @app.after_request
    def apply_security_headers(response):
        """Выполняет операцию `apply_security_headers` в рамках сценария модуля."""
        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("Permissions-Policy", "camera=(), microphone=(), geolocation=()")
        return response

    @app.errorhandler(413)
    def request_too_large(error):
        """Выполняет операцию `request_too_large` в рамках сценария модуля."""
        return render_template("result.html", error="Uploaded files are too large."), 413

    @app.errorhandler(500)
    def internal_error(error):
        """Выполняет операцию `internal_error` в рамках сценария модуля."""
        original = getattr(error, "original_exception", None) or error
        app.logger.exception("Критическая ошибка обработки запроса: %s", original)
        return render_template("result.html", error=f"Error: {original}"), 500

    @app.get("/healthz")
    def healthz():
        """Выполняет операцию `healthz` в рамках сценария модуля."""
        return {"status": "ok"}, 200

    return app


if __name__ == "__main__":
    app = create_app()
    is_production = os.environ.get("FLASK_ENV", "").lower() == "production"
    app.logger.info("Server running on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=not is_production)
