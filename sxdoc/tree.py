"""
Узлы дерева документа.

Дерево состоит из двух видов узлов: Inner (тег, атрибуты, дочерние узлы)
и Text (сырой текст). Узлы неизменяемы, любые преобразования
строят новые значения.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class Symbol:
    """
    Идентификатор в роли значения атрибута.

    При рендеринге выводится своим именем, в отличие от строк,
    которые выводятся как есть.
    """
    name: str

    def __str__(self) -> str:
        return self.name


AttrValue = Union[str, Symbol]
Attr = Tuple[str, AttrValue]
Attrs = Tuple[Attr, ...]


@dataclass(frozen=True)
class Node:
    """Базовый класс для всех узлов дерева документа."""
    pass


@dataclass(frozen=True)
class Text(Node):
    """
    Листовой узел с сырым текстом.

    Текст выводится без экранирования: за экранирование
    отвечает тот, кто создаёт узел.
    """
    value: str


@dataclass(frozen=True)
class Inner(Node):
    """
    Элемент с тегом, упорядоченными атрибутами и дочерними узлами.

    Атрибуты хранятся как последовательность пар (имя, значение). Порядок сохраняется,
    повторяющиеся имена допустимы (при поиске побеждает первое).
    """
    tag: str
    attrs: Attrs = ()
    children: Tuple[Node, ...] = ()

    def __post_init__(self):
        # Списки приводим к кортежам: узел неизменяем
        object.__setattr__(self, "attrs", tuple(tuple(a) for a in self.attrs))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def get(self, name: str, default: Optional[AttrValue] = None) -> Optional[AttrValue]:
        """Значение первого атрибута с именем name."""
        return first_value(self.attrs, name, default)


def first_value(attrs: Iterable[Attr], name: str, default: Any = None) -> Any:
    """
    Ищет значение атрибута по имени.

    Args:
        attrs: Последовательность пар (имя, значение)
        name: Имя атрибута
        default: Значение, если атрибут не найден

    Returns:
        Значение первого совпавшего атрибута или default
    """
    for attr_name, value in attrs:
        if attr_name == name:
            return value
    return default


def attr_text(value: AttrValue) -> str:
    """Текстовое представление значения атрибута."""
    if isinstance(value, Symbol):
        return value.name
    return value


def format_tree(node: Node, indent: int = 0) -> str:
    """Форматирует дерево для отладки."""
    prefix = "  " * indent

    if isinstance(node, Text):
        # Показываем только начало текста для читабельности
        preview = node.value[:50] + "..." if len(node.value) > 50 else node.value
        return f"{prefix}Text({preview!r})"

    if isinstance(node, Inner):
        attrs = " ".join(f"{name}={attr_text(value)!r}" for name, value in node.attrs)
        lines = [f"{prefix}{node.tag}" + (f" [{attrs}]" if attrs else "")]
        for child in node.children:
            lines.append(format_tree(child, indent + 1))
        return "\n".join(lines)

    return f"{prefix}{type(node).__name__}"


__all__ = [
    "Symbol",
    "AttrValue",
    "Attr",
    "Attrs",
    "Node",
    "Text",
    "Inner",
    "first_value",
    "attr_text",
    "format_tree",
]
