from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from .config import load_config
from .engine import build_document, load_source, run_render
from .errors import SxdocError
from .highlight import tokenize
from .macros import STANDARD_EXPANSIONS
from .transform import transform
from .tree import format_tree
from .version import tool_version


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("sxdoc")
    if getattr(_setup_logging, "_inited", False):
        return
    _setup_logging._inited = True  # type: ignore[attr-defined]
    debug = verbose or bool(os.environ.get("SXDOC_DEBUG"))
    log.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sxdoc",
        description="Document markup renderer with code highlighting",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="отладочный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Собрать документ в выходной файл")
    sp_render.add_argument("source", type=Path, help="файл разметки или .yaml/.json с литеральной формой")
    sp_render.add_argument("-o", "--output", type=Path, help="выходной файл (по умолчанию из конфига)")
    sp_render.add_argument("--stdout", action="store_true", help="печатать результат вместо записи в файл")
    sp_render.add_argument("--config", type=Path, help="путь к sxdoc.yaml")

    sp_tokens = sub.add_parser("tokens", help="Токены листинга кода (JSON)")
    sp_tokens.add_argument("source", type=Path, help="файл с кодом")

    sp_tree = sub.add_parser("tree", help="Отладочный вывод дерева документа")
    sp_tree.add_argument("source", type=Path, help="файл разметки или .yaml/.json")
    sp_tree.add_argument("--expanded", action="store_true", help="показать дерево после раскрытия макросов")
    sp_tree.add_argument("--config", type=Path, help="путь к sxdoc.yaml")

    return p


def _tokens_json(source: Path) -> List[Dict[str, Any]]:
    text = source.read_text(encoding="utf-8")
    return [
        {"type": t.type.value, "text": t.text, "line": t.line, "column": t.column}
        for t in tokenize(text)
    ]


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "render":
            config = load_config(ns.config)
            if ns.stdout:
                sys.stdout.write(build_document(load_source(ns.source), config=config))
                return 0
            out = run_render(ns.source, config, output=ns.output)
            sys.stderr.write(f"Wrote {out}\n")
            return 0

        if ns.cmd == "tokens":
            sys.stdout.write(json.dumps(_tokens_json(ns.source), ensure_ascii=False))
            return 0

        if ns.cmd == "tree":
            tree = load_source(ns.source)
            if ns.expanded:
                config = load_config(ns.config)
                tree = transform(
                    tree,
                    STANDARD_EXPANSIONS,
                    registry=config.registry(),
                    max_depth=config.max_expansion_depth,
                )
            sys.stdout.write(format_tree(tree) + "\n")
            return 0

    except SxdocError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except OSError as e:
        sys.stderr.write(f"{e}\n")
        return 2
    except ValueError as e:
        # в т.ч. UnicodeDecodeError при чтении исходника не в UTF-8
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
