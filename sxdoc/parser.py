"""
Парсер литеральных форм документа.

Преобразует вложенные списки вида [tag, [(name, value), ...], child, ...]
и строки в узлы дерева.
"""

from __future__ import annotations

from typing import Any, List

from .errors import InvalidFormError
from .tree import Attr, Inner, Node, Symbol, Text


def parse_tree(form: Any) -> Node:
    """
    Строит дерево из литеральной формы.

    Args:
        form: Строка (текстовый узел), список/кортеж
              [tag, attribute-list, child1, child2, ...] или готовый узел

    Returns:
        Корневой узел

    Raises:
        InvalidFormError: Если форма (или любая вложенная форма) некорректна
    """
    if isinstance(form, Node):
        return form

    if isinstance(form, str):
        return Text(form)

    if not isinstance(form, (list, tuple)):
        raise InvalidFormError(form, "expected a string or a list")

    if len(form) < 2:
        raise InvalidFormError(form, "element needs a tag and an attribute list")

    tag = _parse_identifier(form[0], form, "tag")
    attrs = _parse_attrs(form[1], form)
    children = tuple(parse_tree(child) for child in form[2:])

    return Inner(tag, attrs, children)


def _parse_identifier(value: Any, form: Any, what: str) -> str:
    if isinstance(value, Symbol):
        value = value.name
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        raise InvalidFormError(form, f"{what} must be an identifier, got {value!r}")
    return value


def _parse_attrs(raw: Any, form: Any) -> tuple:
    if not isinstance(raw, (list, tuple)):
        raise InvalidFormError(form, f"attribute list must be a list, got {raw!r}")

    attrs: List[Attr] = []
    for pair in raw:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidFormError(form, f"attribute must be a (name, value) pair, got {pair!r}")
        name = _parse_identifier(pair[0], form, "attribute name")
        value = pair[1]
        if not isinstance(value, (str, Symbol)):
            raise InvalidFormError(form, f"attribute '{name}' value must be text or identifier")
        attrs.append((name, value))

    return tuple(attrs)


__all__ = ["parse_tree"]
