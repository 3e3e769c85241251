"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: utils/composer.py – сборка HTML-фрагмента из отправки.

Назначение модуля:
- Формирование заголовка раскрывающегося блока <details>.
- Сборка тела блока: изображения, текст, список файлов и метка времени.
- Экранирование пользовательского текста и имён файлов перед вставкой в HTML.
"""

import re

from markupsafe import escape

from models.submission import Submission

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

IMAGE_STYLE = "max-width:100%;display:block;margin:8px auto;"
TEXT_STYLE = "display:block;margin:8px 0;"
FILES_LIST_STYLE = "margin:4px 0 0 16px;"
TIMESTAMP_STYLE = "font-size:0.9em;color:#888;margin-top:8px;display:block;"


def build_summary(heading: str | None, text: str | None, words: int = 8) -> str:
    """Заголовок блока: непустой heading или первые слова текста с многоточием."""
    if heading and heading.strip():
        return heading.strip()
    return " ".join((text or "").split()[:words]) + "..."


def format_text(text: str | None) -> str:
    """Экранирует текст и заменяет переводы строк на <br>."""
    return LINE_BREAK_RE.sub("<br>", str(escape(text or "")))


def compose_fragment(
    submission: Submission,
    timestamp: str,
    media_prefix: str = "media/",
    summary_words: int = 8,
) -> str:
    """Собирает блок <details> для одной отправки."""
    summary = escape(build_summary(submission.heading, submission.text, summary_words))

    body = []
    for image in submission.images:
        body.append(f'<img src="{escape(media_prefix + image)}" style="{IMAGE_STYLE}">\n')

    body.append(f'<span style="{TEXT_STYLE}">{format_text(submission.text)}</span>\n')

    if submission.files:
        links = "".join(
            f'<li><a href="{escape(media_prefix + name)}" target="_blank">{escape(name)}</a></li>'
            for name in submission.files
        )
        body.append(f'<span>Files:<ul style="{FILES_LIST_STYLE}">{links}</ul></span>\n')

    body.append(f'<span style="{TIMESTAMP_STYLE}">{escape(timestamp)}</span>\n')

    return (
        "<details>\n"
        f"<summary>{summary}</summary>\n"
        "<p>\n"
        f"{''.join(body)}"
        "</p>\n"
        "</details>\n"
    )
