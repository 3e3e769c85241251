"""
Программа: «PageDrop» – веб-форма для добавления материалов на статические страницы.
Модуль: utils/page_splicer.py – вставка фрагмента в HTML-страницу.

Назначение модуля:
- Поиск точки вставки: первый блок <section>, иначе содержимое <body>, иначе весь документ.
- Вставка сверху (после первого <h1> и следующего за ним <p>) или в конец блока.
- Перезапись файла страницы целиком.

Вставка выполняется регулярными выражениями и рассчитана на простую разметку
с одним <section> и заголовком в начале; при иной структуре место вставки
не определено, но содержимое страницы никогда не удаляется.
"""

import re

from models.submission import Position
from utils.errors import SpliceError

SECTION_RE = re.compile(r"<section([^>]*)>([\s\S]*?)</section>", re.IGNORECASE)
BODY_RE = re.compile(r"<body[^>]*>([\s\S]*)</body>", re.IGNORECASE)
HEADING_RUN_RE = re.compile(
    r"<h1[^>]*>[\s\S]*?</h1>\s*(?:<p(?:\s[^>]*)?>[\s\S]*?</p>\s*)?",
    re.IGNORECASE,
)


class PageSplicer:
    """Интерфейс вставки фрагмента в HTML-документ."""

    def splice(self, html: str, fragment: str, position: Position) -> str:
        raise NotImplementedError


class RegexPageSplicer(PageSplicer):
    """Текстовая вставка по регулярным выражениям."""

    def splice(self, html: str, fragment: str, position: Position) -> str:
        match = SECTION_RE.search(html)
        group = 2
        if match is None:
            match = BODY_RE.search(html)
            group = 1

        if match is None:
            return self.splice_content(html, fragment, position)

        start, end = match.span(group)
        content = self.splice_content(html[start:end], fragment, position)
        return html[:start] + content + html[end:]

    @staticmethod
    def splice_content(content: str, fragment: str, position: Position) -> str:
        if position is Position.TOP:
            heading_run = HEADING_RUN_RE.search(content)
            if heading_run is None:
                return fragment + content
            cut = heading_run.end()
            return content[:cut] + fragment + content[cut:]
        return content + fragment


def splice_page_file(path: str, fragment: str, position: Position, splicer: PageSplicer | None = None) -> None:
    """Читает страницу, вставляет фрагмент и перезаписывает файл."""
    splicer = splicer or RegexPageSplicer()
    try:
        with open(path, encoding="utf-8", newline="") as page_file:
            html = page_file.read()
    except (OSError, UnicodeError) as exc:
        raise SpliceError(f"Failed to read {path}: {exc}") from exc

    try:
        updated = splicer.splice(html, fragment, position)
    except re.error as exc:
        raise SpliceError(f"Failed to splice {path}: {exc}") from exc

    # Переводы строк сохраняются как есть (newline=""); отката при ошибке записи нет
    try:
        with open(path, "w", encoding="utf-8", newline="") as page_file:
            page_file.write(updated)
    except (OSError, UnicodeError) as exc:
        raise SpliceError(f"Failed to write {path}: {exc}") from exc
