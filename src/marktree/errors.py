"""Exception classes and diagnostics for marktree.

Malformed markdown never raises: the parser degrades to a best-effort node
and, in strict mode, records a Diagnostic. Exceptions are reserved for
operations that cannot be performed at all.
"""

from __future__ import annotations

from dataclasses import dataclass

from marktree.location import Position


class MarktreeError(Exception):
    """Base exception for all marktree errors.

    Subclass this for specific error categories.
    """

    pass


class UnsupportedOperationError(MarktreeError):
    """A structural operation the node kind cannot support.

    Raised when adding a child to a node kind that owns no child collection.
    """

    def __init__(self, kind: str, operation: str = "add_child") -> None:
        """Initialize with the offending node kind.

        Args:
            kind: Node kind name (e.g., "code_block")
            operation: Name of the rejected operation
        """
        self.kind = kind
        self.operation = operation
        super().__init__(f"{operation}: node kind '{kind}' does not support children")


class InvalidInputError(MarktreeError):
    """Input that is not markdown text at all.

    Raised by the parser for non-``str`` input. The ``load()`` boundary
    helper turns this into an absent result instead of propagating it.
    """

    pass


class ThemeError(MarktreeError):
    """Unknown color theme requested."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown theme: {name!r}")


class SerializationError(MarktreeError, ValueError):
    """Serialized data does not describe a valid AST."""

    pass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A note about a construct the parser had to degrade.

    Only produced when strict parsing is enabled.

    Attributes:
        message: Human-readable description
        position: Where the degraded construct starts
        code: Stable machine-readable identifier (e.g., "unterminated-fence")

    """

    message: str
    position: Position
    code: str

    def __str__(self) -> str:
        return f"{self.position}: {self.message} [{self.code}]"
