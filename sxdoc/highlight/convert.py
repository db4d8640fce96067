"""
Преобразование токенов кода в узлы дерева (подсвеченные span-ы).
"""

from __future__ import annotations

from typing import Iterable, Tuple

from ..tree import Inner, Node, Text
from .lexer import tokenize
from .tokens import Token, TokenType

NBSP = "&nbsp;"

_CLASS_BY_TYPE = {
    TokenType.LDELIM: "delim",
    TokenType.RDELIM: "delim",
    TokenType.IDENTIFIER: "symbol",
    TokenType.NUMERAL: "number",
}


def _span(css_class: str, *children: Node) -> Inner:
    return Inner("span", (("class", css_class),), children)


def token_to_node(token: Token) -> Node:
    """
    Узел дерева для одного токена.

    Перевод строки становится <br />, серия из n пробелов превращается в span
    с n неразрывными пробелами, остальные токены дают span с текстом токена.
    """
    if token.type == TokenType.NEWLINE:
        return Inner("br")

    if token.type == TokenType.WHITESPACE:
        return _span("whitespace", *(Text(NBSP) for _ in range(token.count)))

    return _span(_CLASS_BY_TYPE[token.type], Text(token.text))


def tokens_to_tree(tokens: Iterable[Token]) -> Tuple[Node, ...]:
    """Преобразует токены поэлементно, сохраняя порядок."""
    return tuple(token_to_node(token) for token in tokens)


def highlight(text: str) -> Tuple[Node, ...]:
    """Токенизирует код и возвращает подсвеченные узлы."""
    return tokens_to_tree(tokenize(text))


__all__ = ["NBSP", "token_to_node", "tokens_to_tree", "highlight"]
