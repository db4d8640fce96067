"""
Main processing pipeline.

source → tree → macro expansion → rendering → single output artifact.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import Config
from .errors import InvalidFormError
from .macros import STANDARD_EXPANSIONS
from .markup import parse_markup
from .parser import parse_tree
from .render import render
from .transform import Expansions, transform
from .tree import Node

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

# Файлы с литеральной формой документа; всё остальное читается как разметка
LITERAL_SUFFIXES = {".yaml", ".yml", ".json"}


def build_document(
    form: Any,
    expansions: Optional[Expansions] = None,
    config: Optional[Config] = None,
) -> str:
    """
    Full in-memory pipeline.

    Args:
        form: Literal form or an already parsed tree
        expansions: Macro vocabulary (standard one by default)
        config: Run settings (tag registry, depth limit)

    Returns:
        Rendered markup text
    """
    config = config or Config()
    registry = config.registry()

    tree = parse_tree(form)
    expanded = transform(
        tree,
        expansions if expansions is not None else STANDARD_EXPANSIONS,
        registry=registry,
        max_depth=config.max_expansion_depth,
    )
    return render(expanded, registry)


def load_source(path: Path) -> Node:
    """
    Read a document source file into a tree.

    YAML/JSON files hold a literal form; other files are markup text.
    """
    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() in LITERAL_SUFFIXES:
        try:
            form = _yaml.load(text)
        except YAMLError as e:
            raise InvalidFormError(str(path), f"unreadable literal file: {e}") from e
        logger.debug(f"Loaded literal form from {path}")
        return parse_tree(form)

    logger.debug(f"Parsing markup from {path}")
    return parse_markup(text)


def write_output(text: str, path: Path) -> Path:
    """Write the artifact, replacing any previous file with the same name."""
    path.write_text(text, encoding="utf-8")
    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path


def run_render(
    source: Path,
    config: Optional[Config] = None,
    output: Optional[Path] = None,
    expansions: Optional[Expansions] = None,
) -> Path:
    """
    Render a source file into the fixed-name output artifact.

    The document is built completely before the output file is opened,
    so a failing run leaves no partial artifact behind.
    """
    config = config or Config()
    text = build_document(load_source(source), expansions, config)
    return write_output(text, output or Path(config.output))


__all__ = ["build_document", "load_source", "write_output", "run_render", "LITERAL_SUFFIXES"]
