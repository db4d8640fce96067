"""
sxdoc: рендеринг документов из s-выражений в разметку.

Дерево документа строится из литеральной формы (или текстовой разметки),
макро-теги раскрываются до терминальных, результат сериализуется в текст.
Листинги кода подсвечиваются встроенным лексером.
"""

from .errors import (
    SxdocError,
    InvalidFormError,
    TransformError,
    UnknownTagError,
    ExpansionDepthError,
    MalformedListingError,
    InvalidCharacterError,
    ConfigError,
)
from .tree import Symbol, Node, Inner, Text, first_value, attr_text, format_tree
from .tags import TagRegistry, DEFAULT_REGISTRY, is_terminal, is_self_closing
from .parser import parse_tree
from .render import render
from .transform import transform, Transformer
from .highlight import tokenize, tokens_to_tree, token_to_node, Token, TokenType
from .macros import STANDARD_EXPANSIONS, default_expansions
from .markup import parse_markup, MarkupParseError
from .engine import build_document

__all__ = [
    # Дерево
    "Symbol", "Node", "Inner", "Text", "first_value", "attr_text", "format_tree",

    # Теги
    "TagRegistry", "DEFAULT_REGISTRY", "is_terminal", "is_self_closing",

    # Конвейер
    "parse_tree", "transform", "Transformer", "render", "build_document",
    "STANDARD_EXPANSIONS", "default_expansions",
    "parse_markup",

    # Подсветка
    "tokenize", "tokens_to_tree", "token_to_node", "Token", "TokenType",

    # Исключения
    "SxdocError", "InvalidFormError", "TransformError", "UnknownTagError",
    "ExpansionDepthError", "MalformedListingError", "InvalidCharacterError",
    "ConfigError", "MarkupParseError",
]
