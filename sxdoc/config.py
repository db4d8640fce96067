from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .tags import DEFAULT_REGISTRY, TagRegistry
from .transform import DEFAULT_MAX_EXPANSION_DEPTH

DEFAULT_CFG_FILE = "sxdoc.yaml"
DEFAULT_OUTPUT = "out.html"

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass
class Config:
    """
    Настройки запуска.

    Имя выходного файла и набор тегов задаются явно в конфигурации,
    а не глобальные константы.
    """
    output: str = DEFAULT_OUTPUT
    max_expansion_depth: Optional[int] = DEFAULT_MAX_EXPANSION_DEPTH
    terminal_tags: List[str] = field(default_factory=list)
    self_closing_tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Any = "<config>") -> "Config":
        """Создание экземпляра из словаря (из YAML)."""
        unknown = set(data) - {"output", "max_expansion_depth", "terminal_tags", "self_closing_tags"}
        if unknown:
            raise ConfigError(source, f"unknown keys: {', '.join(sorted(unknown))}")

        output = data.get("output", DEFAULT_OUTPUT)
        if not isinstance(output, str) or not output:
            raise ConfigError(source, "'output' must be a non-empty string")

        depth = data.get("max_expansion_depth", DEFAULT_MAX_EXPANSION_DEPTH)
        # bool является подклассом int, его не принимаем
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int) or depth < 0):
            raise ConfigError(source, "'max_expansion_depth' must be a non-negative integer or null")

        return cls(
            output=output,
            max_expansion_depth=depth or None,
            terminal_tags=_str_list(data.get("terminal_tags", []), "terminal_tags", source),
            self_closing_tags=_str_list(data.get("self_closing_tags", []), "self_closing_tags", source),
        )

    def registry(self) -> TagRegistry:
        """Реестр тегов с учётом дополнительных тегов из конфигурации."""
        if not self.terminal_tags and not self.self_closing_tags:
            return DEFAULT_REGISTRY
        return DEFAULT_REGISTRY.extended(self.terminal_tags, self.self_closing_tags)


def _str_list(value: Any, key: str, source: Any) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(source, f"'{key}' must be a list of tag names")
    return list(value)


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Optional[Path] = None) -> Config:
    """
    Загрузить sxdoc.yaml.

    • Если путь не задан, ищем sxdoc.yaml в текущем каталоге.
    • Если файла нет, вернуть дефолты.
    • Некорректный YAML или значения: ConfigError.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CFG_FILE
        if not path.is_file():
            return Config()
    elif not path.is_file():
        raise ConfigError(path, "config file not found")

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(path, f"invalid YAML: {e}") from e

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ConfigError(path, "YAML must be a mapping")

    return Config.from_dict(raw, source=path)


__all__ = ["Config", "load_config", "DEFAULT_CFG_FILE", "DEFAULT_OUTPUT"]
