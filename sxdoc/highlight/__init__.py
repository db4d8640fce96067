"""
Пакет подсветки исходного кода в листингах.

Лексер разбивает код на классифицированные токены,
конвертер превращает их в span-узлы дерева документа.
"""

from .tokens import Token, TokenType
from .lexer import CodeLexer, tokenize
from .convert import NBSP, token_to_node, tokens_to_tree, highlight

__all__ = [
    # Основные функции
    "tokenize",
    "tokens_to_tree",
    "highlight",

    # Типы
    "Token",
    "TokenType",

    # Низкоуровневые компоненты (для тестирования и отладки)
    "CodeLexer",
    "token_to_node",
    "NBSP",
]
