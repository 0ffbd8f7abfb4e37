"""Token and TokenType definitions for the marktree lexer.

The lexer produces a list of Token objects that the parser consumes.
Each Token has a type, the literal source text it covers, and the
position of its first character.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto

from marktree.location import Position
from marktree.utils.text import preview


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by category:
    - Structural markers (one character each, plus the ``` fence)
    - Whitespace markers
    - Content runs
    - End of stream

    """

    # Structural markers
    HASH = auto()  # #
    BACKTICK = auto()  # `
    TRIPLE_BACKTICK = auto()  # ```
    ASTERISK = auto()  # *
    UNDERSCORE = auto()  # _
    DASH = auto()  # -
    PLUS = auto()  # +
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    DOT = auto()  # .
    COLON = auto()  # :
    GT = auto()  # >
    EQUALS = auto()  # =

    # Whitespace markers
    SPACE = auto()
    NEWLINE = auto()

    # Content runs
    TEXT = auto()
    NUMBER = auto()

    # End of stream
    EOF = auto()


# Single-character markers and the token type each one produces
STRUCTURAL_CHARS: dict[str, TokenType] = {
    "#": TokenType.HASH,
    "`": TokenType.BACKTICK,
    "*": TokenType.ASTERISK,
    "_": TokenType.UNDERSCORE,
    "-": TokenType.DASH,
    "+": TokenType.PLUS,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    ">": TokenType.GT,
    "=": TokenType.EQUALS,
    " ": TokenType.SPACE,
    "\n": TokenType.NEWLINE,
}

# Unordered list markers
BULLET_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.DASH, TokenType.ASTERISK, TokenType.PLUS}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source
        position: Position of the token's first character

    """

    type: TokenType
    value: str
    position: Position

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Token({self.type.name}, {preview(self.value, 20)!r}, {self.position})"

    @property
    def line(self) -> int:
        """Line number (convenience accessor)."""
        return self.position.line

    @property
    def column(self) -> int:
        """Column number (convenience accessor)."""
        return self.position.column
