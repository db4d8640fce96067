"""
Стандартный словарь макро-тегов.

Каждая функция раскрытия получает атрибуты и исходные дочерние узлы
и возвращает новое поддерево. Вложенные макросы в результате
раскрываются движком повторно.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .errors import MalformedListingError
from .highlight import highlight
from .transform import Expansion
from .tree import Attrs, Inner, Node, Text, attr_text, first_value


def doc(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    """
    Документ целиком: html с head (кодировка и заголовок) и body.
    """
    title = attr_text(first_value(attrs, "title", ""))
    head = Inner("head", (), (
        Inner("meta", (("charset", "utf-8"),)),
        Inner("title", (), (Text(title),)),
    ))
    return Inner("html", (), (head, Inner("body", (), children)))


def section(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    """Секция с якорем из атрибута ref; каждый дочерний узел оборачивается в абзац."""
    ref = first_value(attrs, "ref")
    section_attrs = (("id", ref),) if ref is not None else ()
    return Inner("section", section_attrs, tuple(Inner("p", (), (child,)) for child in children))


def code_listing(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    """
    Листинг кода с подсветкой.

    Raises:
        MalformedListingError: Если дочерний узел не ровно один текстовый
    """
    if len(children) != 1 or not isinstance(children[0], Text):
        raise MalformedListingError(children)
    return Inner("code", attrs, highlight(children[0].value))


def title(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    return Inner("h1", attrs, children)


def subtitle(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    return Inner("h2", attrs, children)


def mono(attrs: Attrs, children: Tuple[Node, ...]) -> Node:
    # Строчный моноширинный фрагмент, без подсветки
    return Inner("code", attrs, children)


STANDARD_EXPANSIONS: Dict[str, Expansion] = {
    "Doc": doc,
    "Section": section,
    "CodeListing": code_listing,
    "Title": title,
    "Subtitle": subtitle,
    "Mono": mono,
}


def default_expansions() -> Dict[str, Expansion]:
    """Копия стандартного словаря, которую можно дополнять своими макросами."""
    return dict(STANDARD_EXPANSIONS)


__all__ = [
    "STANDARD_EXPANSIONS",
    "default_expansions",
    "doc",
    "section",
    "code_listing",
    "title",
    "subtitle",
    "mono",
]
