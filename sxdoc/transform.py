"""
Движок раскрытия макро-тегов.

Переписывает нетерминальные теги с помощью переданного отображения
имя → функция раскрытия и повторно обрабатывает результат,
пока в дереве не останутся только терминальные теги.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import ExpansionDepthError, UnknownTagError
from .parser import parse_tree
from .tags import DEFAULT_REGISTRY, TagRegistry
from .tree import Attrs, Inner, Node, Text

logger = logging.getLogger(__name__)

# Функция раскрытия получает атрибуты и исходные (нераскрытые) дочерние узлы
Expansion = Callable[[Attrs, Tuple[Node, ...]], Any]
Expansions = Mapping[str, Expansion]

DEFAULT_MAX_EXPANSION_DEPTH = 64


class Transformer:
    """
    Раскрывает макросы до неподвижной точки.

    Глубина считает повторные раскрытия: сколько раз подряд результат
    раскрытия снова содержал макро-тег. Исходные дети, которые функция
    раскрытия вернула без изменений, сохраняют глубину своего родителя,
    поэтому вложенность макросов в документе лимит не расходует.
    Превышение лимита означает циклическое (или неограниченное) раскрытие.
    """

    def __init__(
        self,
        expansions: Expansions,
        registry: Optional[TagRegistry] = None,
        max_depth: Optional[int] = DEFAULT_MAX_EXPANSION_DEPTH,
    ):
        """
        Args:
            expansions: Отображение имени макро-тега в функцию раскрытия
            registry: Реестр терминальных тегов
            max_depth: Лимит повторных раскрытий (None или 0 отключают проверку)
        """
        self.expansions = expansions
        self.registry = registry or DEFAULT_REGISTRY
        self.max_depth = max_depth or None

    def transform(self, node: Node) -> Node:
        return self._transform(node, (), {})

    def _transform(self, node: Node, chain: Tuple[str, ...], origins: Dict[int, Tuple[str, ...]]) -> Node:
        # Узел из исходных детей раскрытого макроса: глубина его родителя
        chain = origins.get(id(node), chain)

        if isinstance(node, Text):
            return node

        if self.registry.is_terminal(node.tag):
            children = tuple(self._transform(child, chain, origins) for child in node.children)
            return Inner(node.tag, node.attrs, children)

        expansion = self.expansions.get(node.tag)
        if expansion is None:
            raise UnknownTagError(node.tag)

        if self.max_depth is not None and len(chain) >= self.max_depth:
            raise ExpansionDepthError(node.tag, self.max_depth, chain)

        logger.debug(f"Expanding '{node.tag}' at depth {len(chain)}")
        expanded = parse_tree(expansion(node.attrs, node.children))

        inherited = dict(origins)
        for child in node.children:
            inherited[id(child)] = chain
        return self._transform(expanded, chain + (node.tag,), inherited)


def transform(
    node: Node,
    expansions: Expansions,
    registry: Optional[TagRegistry] = None,
    max_depth: Optional[int] = DEFAULT_MAX_EXPANSION_DEPTH,
) -> Node:
    """
    Удобная функция для раскрытия всех макросов в дереве.

    Args:
        node: Корень дерева
        expansions: Отображение имени макро-тега в функцию раскрытия
        registry: Реестр терминальных тегов
        max_depth: Лимит повторных раскрытий

    Returns:
        Новое дерево, в котором все теги терминальны

    Raises:
        UnknownTagError: Нетерминальный тег без функции раскрытия
        ExpansionDepthError: Превышен лимит вложенных раскрытий
        InvalidFormError: Функция раскрытия вернула некорректную форму
    """
    return Transformer(expansions, registry, max_depth).transform(node)


__all__ = [
    "Expansion",
    "Expansions",
    "DEFAULT_MAX_EXPANSION_DEPTH",
    "Transformer",
    "transform",
]
