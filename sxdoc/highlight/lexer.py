"""
Лексический анализатор исходного кода для подсветки.

Сканирует текст слева направо по правилу максимального совпадения
и классифицирует каждый фрагмент. Нераспознанный символ считается фатальной ошибкой,
ничего не пропускается молча.
"""

from __future__ import annotations

import logging
import re
from typing import List

from ..errors import InvalidCharacterError
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Пунктуация, допустимая в символах наравне с буквами (str.isalpha)
_SYMBOL_PUNCT = frozenset("!$%^&*-_=+:<>/?")
_ASCII_DIGITS = frozenset("0123456789")


def _is_symbol_start(ch: str) -> bool:
    return ch.isalpha() or ch in _SYMBOL_PUNCT


def _is_symbol_follow(ch: str) -> bool:
    return _is_symbol_start(ch) or ch in _ASCII_DIGITS


class CodeLexer:
    """
    Лексер для кода в листингах.

    Распознаёт:
    - ( и ) как разделители
    - перевод строки
    - серии пробелов (только пробел, табуляция не распознаётся)
    - идентификаторы и числа максимальной длины
    """

    # Первые символы классов не пересекаются,
    # поэтому совпадение не зависит от порядка
    _PATTERNS = [
        (TokenType.LDELIM, re.compile(r"\(")),
        (TokenType.RDELIM, re.compile(r"\)")),
        (TokenType.NEWLINE, re.compile(r"\n")),
        (TokenType.WHITESPACE, re.compile(r" +")),
        (TokenType.NUMERAL, re.compile(r"[0-9]+")),
    ]

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст.

        Returns:
            Список токенов в порядке следования

        Raises:
            InvalidCharacterError: При символе вне всех классов
        """
        tokens: List[Token] = []

        while self.position < self.length:
            tokens.append(self.next_token())

        logger.debug(f"Tokenized code listing into {len(tokens)} tokens")
        return tokens

    def next_token(self) -> Token:
        """Извлекает следующий токен из входного потока."""
        start_pos = self.position
        start_line = self.line
        start_column = self.column

        for token_type, pattern in self._PATTERNS:
            match = pattern.match(self.text, self.position)
            if match:
                value = match.group(0)
                self._advance(value)
                return Token(token_type, value, start_pos, start_line, start_column)

        end = self._symbol_end(self.position)
        if end > self.position:
            value = self.text[self.position:end]
            self._advance(value)
            return Token(TokenType.IDENTIFIER, value, start_pos, start_line, start_column)

        raise InvalidCharacterError(self.text[self.position], start_pos, start_line, start_column)

    def _symbol_end(self, pos: int) -> int:
        """Конец символа максимальной длины, начинающегося в pos (или pos)."""
        if pos >= self.length or not _is_symbol_start(self.text[pos]):
            return pos
        end = pos + 1
        while end < self.length and _is_symbol_follow(self.text[end]):
            end += 1
        return end

    def _advance(self, value: str) -> None:
        self.position += len(value)
        if value == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += len(value)


def tokenize(text: str) -> List[Token]:
    """
    Удобная функция для токенизации кода.

    Args:
        text: Исходный текст листинга

    Returns:
        Список токенов
    """
    return CodeLexer(text).tokenize()


__all__ = ["CodeLexer", "tokenize"]
