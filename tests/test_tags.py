from sxdoc.tags import (
    DEFAULT_REGISTRY,
    DEFAULT_SELF_CLOSING_TAGS,
    DEFAULT_TERMINAL_TAGS,
    TagRegistry,
    is_self_closing,
    is_terminal,
)


def test_default_terminal_tags():
    for tag in ["html", "head", "body", "h1", "h6", "p", "ul", "ol", "li", "link", "style",
                "meta", "a", "code", "em", "cite", "br", "hr", "span", "div", "section", "title"]:
        assert is_terminal(tag), tag

    assert not is_terminal("Doc")
    assert not is_terminal("Section")


def test_self_closing_subset():
    assert DEFAULT_SELF_CLOSING_TAGS <= DEFAULT_TERMINAL_TAGS
    assert is_self_closing("br") and is_self_closing("meta")
    assert not is_self_closing("p")


def test_self_closing_tags_are_always_terminal():
    registry = TagRegistry(terminal=frozenset({"p"}), self_closing=frozenset({"img"}))

    assert registry.is_terminal("img")
    assert registry.is_self_closing("img")


def test_extended_returns_new_registry():
    registry = DEFAULT_REGISTRY.extended(terminal=["aside"])

    assert registry.is_terminal("aside")
    assert not DEFAULT_REGISTRY.is_terminal("aside")
