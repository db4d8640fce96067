"""
Тесты движка раскрытия макросов.

Проверяет:
- тождественность на терминальных деревьях
- раскрытие до неподвижной точки
- передачу нераскрытых детей в функцию раскрытия
- ошибки неизвестных тегов и превышения глубины
"""

import pytest

from sxdoc.errors import ExpansionDepthError, InvalidFormError, TransformError, UnknownTagError
from sxdoc.tags import DEFAULT_REGISTRY
from sxdoc.transform import Transformer, transform
from sxdoc.tree import Inner, Text


class TestTerminalTrees:
    """Деревья без макросов не меняются."""

    def test_identity_with_empty_mapping(self, terminal_tree):
        assert transform(terminal_tree, {}) == terminal_tree

    def test_identity_independent_of_mapping(self, terminal_tree):
        expansions = {"div": lambda a, c: Text("never"), "Other": lambda a, c: Text("x")}
        assert transform(terminal_tree, expansions) == terminal_tree

    def test_text_passes_through(self):
        assert transform(Text("raw"), {}) == Text("raw")


class TestExpansion:

    def test_unknown_tag(self):
        with pytest.raises(UnknownTagError) as exc_info:
            transform(Inner("Nope"), {})
        assert exc_info.value.tag == "Nope"

    def test_unknown_tag_nested_in_terminal(self):
        tree = Inner("div", (), (Inner("p", (), (Inner("Missing"),)),))
        with pytest.raises(UnknownTagError):
            transform(tree, {"Other": lambda a, c: Text("x")})

    def test_expansion_receives_original_children(self):
        seen = []

        def outer(attrs, children):
            seen.append((attrs, children))
            return Inner("div", attrs, children)

        inner = Inner("Inner", (), (Text("deep"),))
        tree = Inner("Outer", (("k", "v"),), (inner, Text("t")))
        expansions = {"Outer": outer, "Inner": lambda a, c: Inner("span", a, c)}

        result = transform(tree, expansions)

        # Функция получила исходные, ещё не раскрытые дети
        assert seen == [((("k", "v"),), (inner, Text("t")))]
        assert result == Inner("div", (("k", "v"),), (Inner("span", (), (Text("deep"),)), Text("t")))

    def test_expansion_to_fixpoint(self):
        expansions = {
            "A": lambda a, c: Inner("B", a, c),
            "B": lambda a, c: Inner("C", a, c),
            "C": lambda a, c: Inner("p", a, c),
        }
        assert transform(Inner("A", (), (Text("x"),)), expansions) == Inner("p", (), (Text("x"),))

    def test_expansion_may_return_literal_form(self):
        expansions = {"Note": lambda a, c: ["div", [("class", "note")], *c]}
        result = transform(Inner("Note", (), (Text("hi"),)), expansions)

        assert result == Inner("div", (("class", "note"),), (Text("hi"),))

    def test_expansion_returning_garbage(self):
        with pytest.raises(InvalidFormError):
            transform(Inner("Bad"), {"Bad": lambda a, c: 42})

    def test_input_is_not_modified(self):
        tree = Inner("div", (), (Inner("X", (), (Text("a"),)),))
        transform(tree, {"X": lambda a, c: Inner("span", a, c)})

        assert tree == Inner("div", (), (Inner("X", (), (Text("a"),)),))


def _countdown(attrs, children):
    n = int(attrs[0][1])
    if n == 0:
        return Text("done")
    return Inner("Down", (("n", str(n - 1)),))


class TestDepthGuard:

    def test_cycle_is_reported(self):
        expansions = {"Ping": lambda a, c: Inner("Pong"), "Pong": lambda a, c: Inner("Ping")}

        with pytest.raises(ExpansionDepthError) as exc_info:
            transform(Inner("Ping"), expansions, max_depth=10)

        error = exc_info.value
        assert isinstance(error, TransformError)
        assert error.limit == 10
        assert len(error.chain) == 10
        assert error.chain[:2] == ("Ping", "Pong")

    def test_finite_chain_within_limit(self):
        result = transform(Inner("Down", (("n", "5"),)), {"Down": _countdown}, max_depth=10)
        assert result == Text("done")

    def test_finite_chain_over_limit(self):
        with pytest.raises(ExpansionDepthError):
            transform(Inner("Down", (("n", "20"),)), {"Down": _countdown}, max_depth=10)

    def test_guard_disabled(self):
        transformer = Transformer({"Down": _countdown}, DEFAULT_REGISTRY, max_depth=None)
        assert transformer.transform(Inner("Down", (("n", "100"),))) == Text("done")

    def test_depth_counts_nesting_not_siblings(self):
        # Много соседних макросов на одном уровне не упираются в лимит
        tree = Inner("div", (), tuple(Inner("Item") for _ in range(20)))
        result = transform(tree, {"Item": lambda a, c: Inner("li")}, max_depth=2)

        assert result.children == tuple(Inner("li") for _ in range(20))

    def test_document_nesting_does_not_count(self):
        # Глубоко вложенные секции исходного документа раскрываются по одному разу
        tree = Text("leaf")
        for _ in range(70):
            tree = Inner("Box", (), (tree,))
        expansions = {"Box": lambda a, c: Inner("div", a, c)}

        result = transform(tree, expansions, max_depth=3)

        depth = 0
        while isinstance(result, Inner):
            assert result.tag == "div"
            result = result.children[0]
            depth += 1
        assert (depth, result) == (70, Text("leaf"))

    def test_generated_wrappers_count(self):
        # Макрос, оборачивающий детей в самого себя, упирается в лимит
        expansions = {"Grow": lambda a, c: Inner("Grow", a, c)}

        with pytest.raises(ExpansionDepthError) as exc_info:
            transform(Inner("Grow", (), (Text("x"),)), expansions, max_depth=5)
        assert exc_info.value.chain == ("Grow",) * 5
