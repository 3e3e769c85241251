"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: routes/pages.py – форма отправки и раздача статических файлов.
"""

from flask import render_template, send_from_directory

from utils.pages import list_target_pages


def register_routes(app):
    """Выполняет операцию `register_routes` в рамках сценария модуля."""

    @app.get("/")
    def index():
        """Форма отправки со списком доступных страниц."""
        pages = list_target_pages(app.config["PUBLIC_DIR"], app.config["INDEX_PAGE"])
        return render_template(
            "form.html",
            pages=pages,
            heading_max_length=app.config["HEADING_MAX_LENGTH"],
            text_max_length=app.config["TEXT_MAX_LENGTH"],
        )

    @app.get("/media/<path:filename>")
    def media_file(filename):
        """Выполняет операцию `media_file` в рамках сценария модуля."""
        return send_from_directory(app.config["MEDIA_DIR"], filename)

    @app.get("/<path:filename>")
    def public_file(filename):
        """Выполняет операцию `public_file` в рамках сценария модуля."""
        return send_from_directory(app.config["PUBLIC_DIR"], filename)
