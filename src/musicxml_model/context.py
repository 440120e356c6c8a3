"""Coding context for tracking the path during encoding and decoding."""

from __future__ import annotations

from dataclasses import dataclass, field


class CodingStack:
    """Stack of path names from the document root to the current node."""

    def __init__(self) -> None:
        self._stack: list[str] = []

    def push(self, name: str) -> None:
        """Push a name onto the stack."""
        self._stack.append(name)

    def pop(self) -> str | None:
        """Pop a name from the stack."""
        if self._stack:
            return self._stack.pop()
        return None

    @property
    def path(self) -> tuple[str, ...]:
        """Get the names from the root to the current node."""
        return tuple(self._stack)


@dataclass
class CodingContext:
    """State carried through a single encode or decode call.

    Holds the coding path used in error diagnostics and the decoder options
    that affect how values are read.
    """

    trim_whitespace: bool = False
    _stack: CodingStack = field(default_factory=CodingStack)

    @property
    def coding_path(self) -> tuple[str, ...]:
        return self._stack.path

    def enter(self, name: str) -> PathContext:
        """Return a context manager that scopes ``name`` on the path."""
        return PathContext(self, name)

    def push(self, name: str) -> None:
        self._stack.push(name)

    def pop(self) -> None:
        self._stack.pop()


class PathContext:
    """Context manager for path traversal."""

    def __init__(self, context: CodingContext, name: str):
        self._context = context
        self._name = name

    def __enter__(self) -> PathContext:
        self._context.push(self._name)
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self._context.pop()
