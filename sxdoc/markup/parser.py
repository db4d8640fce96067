"""
Парсер текстовой разметки документов.

Строит дерево документа из токенов MarkupLexer. Ошибки, после которых
разбор можно продолжить (несовпадающий закрывающий тег, незакрытое значение
атрибута и т.п.), накапливаются; структурные ошибки прерывают разбор.
В обоих случаях результатом будет MarkupParseError со всеми найденными ошибками.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import SxdocError
from ..tree import Attr, Inner, Node, Text
from .lexer import MarkupLexer, MarkupToken, MarkupTokenType as Tk, Span

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPE = re.compile(r'\\(["\\])')


@dataclass(frozen=True)
class MarkupSyntaxError:
    """Одна синтаксическая ошибка с диапазоном в исходном тексте."""
    message: str
    span: Span


class MarkupParseError(SxdocError):
    """Разметка содержит синтаксические ошибки."""

    def __init__(self, errors: List[MarkupSyntaxError], source: str):
        self.errors = list(errors)
        self.source = source
        super().__init__(format_errors(self.errors, source))


class _Abort(Exception):
    """Внутренний сигнал о неустранимой ошибке разбора."""


def pos_to_line(pos: int, source: str) -> int:
    """
    Номер строки (с 1) для позиции в тексте.

    Переводом строки считаются LF, CRLF и одиночный CR.
    """
    return len(_LINE_BREAK.findall(source, 0, min(pos, len(source)))) + 1


def pos_to_column(pos: int, source: str) -> int:
    pos = min(pos, len(source))
    line_start = 0
    for match in _LINE_BREAK.finditer(source, 0, pos):
        line_start = match.end()
    return pos - line_start + 1


def format_errors(errors: List[MarkupSyntaxError], source: str) -> str:
    """
    Сообщение со строками исходника и маркером под местом каждой ошибки.

    Для диапазона, занимающего несколько строк, выводится каждая строка
    с маркером под её частью диапазона.
    """
    lines = _LINE_BREAK.split(source)
    parts = [f"Markup syntax errors ({len(errors)}):"]

    for error in errors:
        start = error.span.start
        last = max(error.span.end - 1, start)
        start_line = pos_to_line(start, source)
        end_line = pos_to_line(last, source)
        column = pos_to_column(start, source)
        parts.append(f"{start_line}:{column}: {error.message}")

        for number in range(start_line, min(end_line, len(lines)) + 1):
            text = lines[number - 1]
            first = column if number == start_line else 1
            final = pos_to_column(last, source) if number == end_line else len(text)
            width = max(1, min(final, len(text)) - first + 1)
            parts.append(f"    {text}")
            parts.append("    " + " " * (first - 1) + "^" * width)

    return "\n".join(parts)


class MarkupParser:
    """
    Рекурсивный спуск по разметке: один корневой элемент,
    вложенные элементы и текст.
    """

    def __init__(self, text: str):
        self.text = text
        self.lexer = MarkupLexer(text)
        self.errors: List[MarkupSyntaxError] = []

    def parse(self) -> Node:
        """
        Returns:
            Корневой узел документа

        Raises:
            MarkupParseError: При любых синтаксических ошибках
        """
        try:
            root = self._parse_document()
        except _Abort:
            root = None

        if self.errors or root is None:
            raise MarkupParseError(self.errors, self.text)

        logger.debug(f"Parsed markup document with root <{root.tag}>")
        return root

    # ---- Документ ----

    def _parse_document(self) -> Optional[Inner]:
        while True:
            token = self.lexer.peek()
            if token.type == Tk.LANGLE:
                break
            if token.type == Tk.EOF:
                self._fail(token, "expected root element, found EOF")
            self._skip_outside_root(self.lexer.pop())

        root = self._parse_element()

        while self.lexer.peek().type != Tk.EOF:
            self._skip_outside_root(self.lexer.pop())

        return root

    def _skip_outside_root(self, token: MarkupToken) -> None:
        if token.type != Tk.TEXT or token.text.strip():
            logger.warning(f"Ignoring content outside of the root element at offset {token.start}")

    # ---- Элементы ----

    def _parse_element(self) -> Inner:
        self.lexer.pop()  # '<'

        token = self.lexer.peek()
        if token.type != Tk.NAME:
            self._fail(token, "expected tag name")
        name = self.lexer.pop().text

        attrs = self._parse_attrs()

        token = self.lexer.peek()
        if token.type != Tk.RANGLE:
            self._fail(token, "expected '>'")
        self.lexer.pop()

        children = self._parse_nodes()

        token = self.lexer.peek()
        if token.type == Tk.EOF:
            self._fail(token, f"expected closing tag </{name}>, but found EOF")

        self._parse_close_tag(name)
        return Inner(name, attrs, children)

    def _parse_nodes(self) -> Tuple[Node, ...]:
        nodes: List[Node] = []

        while True:
            token = self.lexer.peek()
            if token.type in (Tk.LANGLE_SLASH, Tk.EOF):
                return tuple(nodes)

            if token.type == Tk.LANGLE:
                nodes.append(self._parse_element())
            elif token.type == Tk.TEXT:
                text = self._clean_text(self.lexer.pop())
                if text is not None:
                    nodes.append(Text(text))
            else:
                self._error(token, f"expected '<', '</' or text, but found '{token.text}'")
                self.lexer.pop()

    def _parse_close_tag(self, open_name: str) -> None:
        self.lexer.pop()  # '</'

        if self.lexer.peek().type == Tk.ORPHAN_HASHES:
            self._error(self.lexer.pop(), "orphaned hashes")

        token = self.lexer.peek()
        if token.type == Tk.NAME:
            self.lexer.pop()
            if token.text != open_name:
                self._error(
                    token,
                    f"closing tag must match opening (expected '{open_name}' but found '{token.text}')",
                )
        elif token.type == Tk.RANGLE:
            self._error(token, "expected tag name")
        else:
            self._fail(token, "expected tag name, followed by '>'")

        token = self.lexer.peek()
        if token.type != Tk.RANGLE:
            self._fail(token, "expected '>'")
        self.lexer.pop()

    # ---- Атрибуты ----

    def _parse_attrs(self) -> Tuple[Attr, ...]:
        attrs: List[Attr] = []
        while self.lexer.peek().type == Tk.NAME:
            attrs.append(self._parse_attr())
        return tuple(attrs)

    def _parse_attr(self) -> Attr:
        name = self.lexer.pop().text

        token = self.lexer.peek()
        if token.type == Tk.EQUALS:
            self.lexer.pop()
        elif token.type in (Tk.ATTR_VAL, Tk.UNTERMINATED_ATTR_VAL):
            self._error(token, "expected '='")
        else:
            self._fail(token, "expected '=', followed by attribute value")

        token = self.lexer.peek()
        if token.type == Tk.UNTERMINATED_ATTR_VAL:
            self._error(token, "unterminated attribute value")
        elif token.type != Tk.ATTR_VAL:
            self._fail(token, "expected attribute value")

        value = self.lexer.pop().text
        return name, _ESCAPE.sub(r"\1", value)

    # ---- Текст ----

    @staticmethod
    def _clean_text(token: MarkupToken) -> Optional[str]:
        """
        Нормализует текстовый узел.

        Пробельный текст с переводом строки (отступы между элементами) отбрасывается,
        пробелы с переводами строк по краям обрезаются. Сырой текст сохраняется,
        кроме первого перевода строки и отступа строки с закрывающим тегом.
        """
        text = token.text

        if token.raw:
            if text.startswith("\r\n"):
                text = text[2:]
            elif text.startswith("\n"):
                text = text[1:]
            last_break = max(text.rfind("\n"), text.rfind("\r"))
            if last_break != -1 and not text[last_break + 1:].strip():
                text = text[:last_break]
                if text.endswith("\r"):
                    text = text[:-1]
            return text

        if not text.strip():
            return None if ("\n" in text or "\r" in text) else text

        stripped = text.lstrip()
        if _LINE_BREAK.search(text[:len(text) - len(stripped)]):
            text = stripped
        stripped = text.rstrip()
        if _LINE_BREAK.search(text[len(stripped):]):
            text = stripped
        return text

    # ---- Ошибки ----

    def _error(self, token: MarkupToken, message: str) -> None:
        self.errors.append(MarkupSyntaxError(message, token.span))

    def _fail(self, token: MarkupToken, message: str) -> None:
        self._error(token, message)
        raise _Abort()


def parse_markup(text: str) -> Node:
    """
    Удобная функция для разбора текстовой разметки.

    Args:
        text: Исходный текст документа

    Returns:
        Корневой узел дерева документа

    Raises:
        MarkupParseError: При синтаксических ошибках
    """
    return MarkupParser(text).parse()


__all__ = [
    "MarkupParser",
    "MarkupParseError",
    "MarkupSyntaxError",
    "parse_markup",
    "pos_to_line",
    "pos_to_column",
    "format_errors",
]
