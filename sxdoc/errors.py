"""
Base exception and error taxonomy for sxdoc.

All expected errors that should be displayed to the user
as clean messages (without stack traces) inherit from SxdocError.
Every one of them is fatal: the pipeline stops and no output is written.

Programming errors and bugs should NOT inherit from SxdocError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple


class SxdocError(Exception):
    """
    Base class for all user-facing errors in sxdoc.

    These errors indicate problems with the input document, the macro
    vocabulary or the configuration that the user can fix.
    """
    pass


class InvalidFormError(SxdocError):
    """Literal form matches neither the element shape nor the text shape."""

    def __init__(self, value: Any, reason: str = ""):
        message = f"Invalid document form: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.value = value
        self.reason = reason


class TransformError(SxdocError):
    """Common base for errors raised while expanding macro tags."""
    pass


class UnknownTagError(TransformError):
    """Tag is neither terminal nor registered in the expansion mapping."""

    def __init__(self, tag: str):
        super().__init__(f"Unknown tag '{tag}': not a terminal tag and no expansion registered")
        self.tag = tag


class ExpansionDepthError(TransformError):
    """
    Expansion results kept producing macro tags past the configured limit.

    Only re-expansion of generated nodes counts; macros nested in the source
    document do not. Hitting the limit means a cyclic or unbounded expansion.
    """

    def __init__(self, tag: str, limit: int, chain: Sequence[str] = ()):
        self.tag = tag
        self.limit = limit
        self.chain: Tuple[str, ...] = tuple(chain)
        # Показываем только хвост цепочки, чтобы сообщение оставалось читаемым
        tail = " -> ".join(self.chain[-8:] + (tag,))
        super().__init__(
            f"Expansion of '{tag}' exceeded the re-expansion limit of {limit}, "
            f"likely a cyclic macro (chain: ... -> {tail})"
        )


class MalformedListingError(SxdocError):
    """Code listing macro requires exactly one text child."""

    def __init__(self, children: Sequence[Any]):
        self.children = tuple(children)
        kinds = ", ".join(type(c).__name__ for c in self.children) or "nothing"
        super().__init__(f"Code listing expects exactly one text child, got: {kinds}")


class InvalidCharacterError(SxdocError):
    """Tokenizer met a character outside every recognized class."""

    def __init__(self, char: str, position: int, line: int = 0, column: int = 0):
        where = f"{line}:{column}" if line else f"offset {position}"
        super().__init__(f"Invalid character {char!r} at {where}")
        self.char = char
        self.position = position
        self.line = line
        self.column = column


class ConfigError(SxdocError):
    """Configuration file exists but cannot be used."""

    def __init__(self, path: Any, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


__all__ = [
    "SxdocError",
    "InvalidFormError",
    "TransformError",
    "UnknownTagError",
    "ExpansionDepthError",
    "MalformedListingError",
    "InvalidCharacterError",
    "ConfigError",
]
