"""
Реестр терминальных тегов.

Терминальный тег рендерится напрямую как элемент разметки.
Самозакрывающиеся теги входят в число терминальных, их дети никогда не выводятся.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable

logger = logging.getLogger(__name__)


DEFAULT_TERMINAL_TAGS: FrozenSet[str] = frozenset({
    # Каркас документа
    "html", "head", "body", "title",
    "link", "style", "meta",
    # Заголовки и блоки
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "div", "section", "blockquote", "pre",
    # Списки
    "ul", "ol", "li",
    # Строчные элементы
    "a", "code", "em", "strong", "cite", "span",
    # Разделители
    "br", "hr",
})

DEFAULT_SELF_CLOSING_TAGS: FrozenSet[str] = frozenset({"br", "hr", "meta", "link"})


@dataclass(frozen=True)
class TagRegistry:
    """
    Неизменяемый набор терминальных и самозакрывающихся тегов.

    Передаётся рендереру и движку преобразований явно, а не через глобальное состояние.
    """
    terminal: FrozenSet[str] = DEFAULT_TERMINAL_TAGS
    self_closing: FrozenSet[str] = DEFAULT_SELF_CLOSING_TAGS

    def __post_init__(self):
        # Самозакрывающийся тег всегда терминален
        object.__setattr__(self, "self_closing", frozenset(self.self_closing))
        object.__setattr__(self, "terminal", frozenset(self.terminal) | self.self_closing)

    def is_terminal(self, tag: str) -> bool:
        return tag in self.terminal

    def is_self_closing(self, tag: str) -> bool:
        return tag in self.self_closing

    def extended(self, terminal: Iterable[str] = (), self_closing: Iterable[str] = ()) -> "TagRegistry":
        """Новый реестр с дополнительными тегами."""
        registry = TagRegistry(
            terminal=self.terminal | frozenset(terminal),
            self_closing=self.self_closing | frozenset(self_closing),
        )
        logger.debug(
            f"Extended tag registry: {len(registry.terminal)} terminal, "
            f"{len(registry.self_closing)} self-closing"
        )
        return registry


DEFAULT_REGISTRY = TagRegistry()


def is_terminal(tag: str) -> bool:
    """Проверка по реестру по умолчанию."""
    return DEFAULT_REGISTRY.is_terminal(tag)


def is_self_closing(tag: str) -> bool:
    return DEFAULT_REGISTRY.is_self_closing(tag)


__all__ = [
    "DEFAULT_TERMINAL_TAGS",
    "DEFAULT_SELF_CLOSING_TAGS",
    "DEFAULT_REGISTRY",
    "TagRegistry",
    "is_terminal",
    "is_self_closing",
]
