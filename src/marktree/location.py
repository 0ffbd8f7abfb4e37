"""Source positions for tokens and AST nodes.

Provides the Position dataclass used by the lexer, the parser and every
consumer that needs to map a node back to the source text.

All three counters are 0-indexed and advance together while scanning:
- offset grows by one per character
- a newline bumps line and resets column to 0
- any other character bumps column

Thread Safety:
Position is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A location in source text.

    Ordering compares (line, column, offset), which for positions taken
    from the same source is scan order.

    Attributes:
        line: Line number (0-indexed)
        column: Column number (0-indexed)
        offset: Character offset from the start of the document (0-indexed)

    Examples:
            >>> pos = Position(line=2, column=4, offset=17)
            >>> str(pos)
            'L2:C4'

    """

    line: int = 0
    column: int = 0
    offset: int = 0

    def __str__(self) -> str:
        return f"L{self.line}:C{self.column}"

    @classmethod
    def zero(cls) -> Position:
        """Position of the first character of a document."""
        return cls(0, 0, 0)

    def advance(self, char: str) -> Position:
        """Return the position after consuming ``char``."""
        if char == "\n":
            return Position(self.line + 1, 0, self.offset + 1)
        return Position(self.line, self.column + 1, self.offset + 1)

    def shifted(self, columns: int) -> Position:
        """Return the position ``columns`` characters further along the same line."""
        return Position(self.line, self.column + columns, self.offset + columns)
