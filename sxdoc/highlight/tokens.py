"""
Лексические типы для подсветки исходного кода.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов исходного кода."""

    LDELIM = "LDELIM"            # (
    RDELIM = "RDELIM"            # )
    NEWLINE = "NEWLINE"          # \n
    WHITESPACE = "WHITESPACE"    # серия пробелов
    IDENTIFIER = "IDENTIFIER"    # symbol, +, list->vector
    NUMERAL = "NUMERAL"          # 42


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    text: str
    position: int        # Позиция в исходном тексте
    line: int = 1        # Номер строки (начиная с 1)
    column: int = 1      # Номер колонки (начиная с 1)

    @property
    def count(self) -> int:
        """Длина серии пробелов (для WHITESPACE)."""
        return len(self.text)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
