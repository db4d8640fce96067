"""
Пакет для чтения документов в текстовой разметке.

Предоставляет лексер и парсер угловых тегов, строящие
то же дерево документа, что и парсер литеральных форм.
"""

from .parser import parse_markup, MarkupParser, MarkupParseError, MarkupSyntaxError
from .lexer import MarkupLexer, MarkupToken, MarkupTokenType

__all__ = [
    # Основная функция для использования
    "parse_markup",

    # Исключения
    "MarkupParseError",
    "MarkupSyntaxError",

    # Низкоуровневые компоненты (для тестирования и отладки)
    "MarkupParser",
    "MarkupLexer",
    "MarkupToken",
    "MarkupTokenType",
]
