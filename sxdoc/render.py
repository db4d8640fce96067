"""
Рендеринг дерева документа в текст разметки.
"""

from __future__ import annotations

from typing import List, Optional

from .tags import DEFAULT_REGISTRY, TagRegistry
from .tree import Attrs, Inner, Node, Text, attr_text


class Renderer:
    """
    Сериализует полностью терминальное дерево обходом в глубину.

    Текст выводится без экранирования, дети самозакрывающихся
    элементов игнорируются.
    """

    def __init__(self, registry: Optional[TagRegistry] = None):
        self.registry = registry or DEFAULT_REGISTRY

    def render(self, node: Node) -> str:
        parts: List[str] = []
        self._emit(node, parts)
        return "".join(parts)

    def _emit(self, node: Node, out: List[str]) -> None:
        if isinstance(node, Text):
            out.append(node.value)
            return

        if not isinstance(node, Inner):
            raise TypeError(f"Cannot render {type(node).__name__}")

        attrs = render_attrs(node.attrs)
        if self.registry.is_self_closing(node.tag):
            out.append(f"<{node.tag}{attrs} />")
            return

        out.append(f"<{node.tag}{attrs}>")
        for child in node.children:
            self._emit(child, out)
        out.append(f"</{node.tag}>")


def render_attrs(attrs: Attrs) -> str:
    """Атрибуты в порядке объявления, включая повторяющиеся имена."""
    return "".join(f' {name}="{attr_text(value)}"' for name, value in attrs)


def render(node: Node, registry: Optional[TagRegistry] = None) -> str:
    """
    Удобная функция для рендеринга дерева.

    Args:
        node: Корень дерева без макро-тегов
        registry: Реестр тегов (по умолчанию стандартный)

    Returns:
        Текст разметки
    """
    return Renderer(registry).render(node)


__all__ = ["Renderer", "render", "render_attrs"]
