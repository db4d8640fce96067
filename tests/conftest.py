import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from sxdoc.tree import Inner, Text

REPO_ROOT = Path(__file__).resolve().parent.parent


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture
def write_file():
    return write


@pytest.fixture
def sample_markup() -> str:
    """Небольшой документ в текстовой разметке со всеми стандартными макросами."""
    return textwrap.dedent("""
    <Doc title="My Doc">
      <Title>Hello</Title>
      <Section ref="s1">
        First
      </Section>
      <CodeListing ##>
    (+ 1 2)
      </##CodeListing>
    </Doc>
    """).lstrip()


@pytest.fixture
def terminal_tree() -> Inner:
    """Дерево только из терминальных тегов."""
    return Inner("div", (("class", "box"), ("class", "dup")), (
        Inner("p", (), (Text("one"), Inner("br"))),
        Inner("ul", (), (Inner("li", (), (Text("a"),)), Inner("li", (), (Text("b"),)))),
        Text("tail"),
    ))


@pytest.fixture
def tmpproj(tmp_path: Path, sample_markup: str) -> Path:
    """Каталог с исходником документа для CLI-тестов."""
    write(tmp_path / "doc.sx", sample_markup)
    return tmp_path


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-m", "sxdoc.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def cli():
    return run_cli
