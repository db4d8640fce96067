"""
Лексический анализатор текстовой разметки документов.

Разметка состоит из тегов в угловых скобках:

    <Doc title="My doc">
      Текст <Mono>code</Mono>
      <CodeListing ##>
    (raw < text)
      </##CodeListing>
    </Doc>

Лексер работает в двух режимах: внутри тега (имена, =, значения атрибутов)
и снаружи (текст). Открывающий тег, закрытый решётками (`##>`), включает
сырой режим: текст продолжается до `</` с тем же числом решёток.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class MarkupTokenType(enum.Enum):
    """Типы токенов разметки."""

    LANGLE = "LANGLE"                                # <
    LANGLE_SLASH = "LANGLE_SLASH"                    # </ (и решётки сырого режима)
    RANGLE = "RANGLE"                                # > или ##>
    NAME = "NAME"                                    # Doc в <Doc title="My Doc">
    EQUALS = "EQUALS"                                # =
    ATTR_VAL = "ATTR_VAL"                            # "My Doc" в <Doc title="My Doc">
    UNTERMINATED_ATTR_VAL = "UNTERMINATED_ATTR_VAL"  # Некорректное значение
    ORPHAN_HASHES = "ORPHAN_HASHES"                  # ## без >
    TEXT = "TEXT"                                    # текст между тегами
    EOF = "EOF"


@dataclass(frozen=True)
class Span:
    """Полуоткрытый диапазон позиций в исходном тексте."""
    start: int
    end: int

    def __repr__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class MarkupToken:
    type: MarkupTokenType
    text: str
    span: Span
    raw: bool = False  # Текст из сырого режима

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end


def is_name_start(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_name_continue(ch: str) -> bool:
    return is_name_start(ch) or ("0" <= ch <= "9") or ch in "._-"


class MarkupLexer:
    """
    Потоковый лексер с буфером на один токен (peek/pop).
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.position = 0
        self.inside = False
        self.hash_count = 0
        self._buffer: Optional[MarkupToken] = None

    def peek(self) -> MarkupToken:
        if self._buffer is None:
            self._buffer = self._read_next()
        return self._buffer

    def pop(self) -> MarkupToken:
        if self._buffer is not None:
            token, self._buffer = self._buffer, None
            return token
        return self._read_next()

    def _read_next(self) -> MarkupToken:
        if self.inside:
            return self._read_inside()
        return self._read_outside()

    # ---- Внутри тега ----

    def _read_inside(self) -> MarkupToken:
        self._skip_while(lambda c: c in " \t\r\n")

        start = self.position
        if start >= self.length:
            return MarkupToken(MarkupTokenType.EOF, "", Span(start, start))

        ch = self.text[start]
        self.position += 1

        if ch == "<":
            kind = self._read_langle()
        elif ch == ">":
            kind = self._read_rangle(0)
        elif ch == "#":
            kind = self._read_hashes()
        elif ch == "=":
            kind = MarkupTokenType.EQUALS
        elif ch == '"':
            kind = self._read_attr_val()
        elif is_name_start(ch):
            self._skip_while(is_name_continue)
            kind = MarkupTokenType.NAME
        else:
            # Посторонний символ внутри тега: дальше читаем как текст,
            # парсер сообщит об отсутствующем '>'
            self.position = start
            self.inside = False
            self.hash_count = 0
            return self._read_next()

        end = self.position
        # Кавычки не входят в значение атрибута
        if kind == MarkupTokenType.ATTR_VAL:
            start, end = start + 1, end - 1
        elif kind == MarkupTokenType.UNTERMINATED_ATTR_VAL:
            start += 1

        return MarkupToken(kind, self.text[start:end], Span(start, end))

    def _read_langle(self) -> MarkupTokenType:
        if self._peek_char() == "/":
            self.position += 1
            # Решётки закрывающего тега сырого блока уже проверены при чтении текста
            self.position += self.hash_count
            self.hash_count = 0
            return MarkupTokenType.LANGLE_SLASH
        return MarkupTokenType.LANGLE

    def _read_rangle(self, hash_count: int) -> MarkupTokenType:
        self.inside = False
        self.hash_count = hash_count
        return MarkupTokenType.RANGLE

    def _read_hashes(self) -> MarkupTokenType:
        # Первая решётка уже прочитана
        hash_count = 1 + self._skip_while(lambda c: c == "#")
        if self._peek_char() == ">":
            self.position += 1
            return self._read_rangle(hash_count)
        return MarkupTokenType.ORPHAN_HASHES

    def _read_attr_val(self) -> MarkupTokenType:
        escape_next = False
        while self.position < self.length:
            ch = self.text[self.position]
            if ch in "\r\n":
                return MarkupTokenType.UNTERMINATED_ATTR_VAL
            self.position += 1
            if ch == "\\" and not escape_next:
                escape_next = True
            elif ch == '"' and not escape_next:
                return MarkupTokenType.ATTR_VAL
            else:
                escape_next = False
        return MarkupTokenType.UNTERMINATED_ATTR_VAL

    # ---- Снаружи тега ----

    def _read_outside(self) -> MarkupToken:
        start = self.position
        closing = "</" + "#" * self.hash_count

        while self.position < self.length:
            if self.text[self.position] == "<":
                if self.hash_count == 0 or self.text.startswith(closing, self.position):
                    break
            self.position += 1

        self.inside = True
        end = self.position
        if end > start:
            return MarkupToken(
                MarkupTokenType.TEXT, self.text[start:end], Span(start, end), raw=self.hash_count > 0
            )
        return self._read_next()

    # ---- Утилиты ----

    def _skip_while(self, pred) -> int:
        count = 0
        while self.position < self.length and pred(self.text[self.position]):
            self.position += 1
            count += 1
        return count

    def _peek_char(self) -> Optional[str]:
        if self.position < self.length:
            return self.text[self.position]
        return None


__all__ = [
    "MarkupTokenType",
    "MarkupToken",
    "MarkupLexer",
    "Span",
    "is_name_start",
    "is_name_continue",
]
