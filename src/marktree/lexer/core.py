"""Single-pass character lexer with O(n) guaranteed performance.

Scans left to right, never rewinds. The only lookahead is three characters
to recognize a ``` fence before falling back to single-character rules.

Rules, in priority order:
1. ``` becomes one TRIPLE_BACKTICK token
2. each structural marker, space or newline becomes its own token
3. a maximal run of ASCII digits becomes one NUMBER token
4. a maximal run of anything else becomes one TEXT token

Tabs, carriage returns and non-ASCII characters have no rule of their own
and fold into TEXT runs. The lexer never fails.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from marktree.lexer.charsets import ASCII_DIGITS, FENCE, TEXT_STOP
from marktree.location import Position
from marktree.tokens import STRUCTURAL_CHARS, Token, TokenType


class Lexer:
    """Character lexer producing a flat token stream.

    Usage:
            >>> for token in Lexer("# Hi").tokenize():
            ...     print(token)
        Token(HASH, '#', L0:C0)
        Token(SPACE, ' ', L0:C1)
        Token(TEXT, 'Hi', L0:C2)
        Token(EOF, '', L0:C4)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_line",
        "_col",
    )

    def __init__(self, source: str) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._line = 0
        self._col = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, ending with exactly one EOF token
            positioned at the final scan point.

        Complexity: O(n) where n = len(source)
        """
        source = self._source
        source_len = self._source_len

        while self._pos < source_len:
            char = source[self._pos]

            if char == "`" and source.startswith(FENCE, self._pos):
                start = self._position()
                self._consume(3)
                yield Token(TokenType.TRIPLE_BACKTICK, FENCE, start)
                continue

            token_type = STRUCTURAL_CHARS.get(char)
            if token_type is not None:
                start = self._position()
                self._consume(1)
                yield Token(token_type, char, start)
                continue

            if char in ASCII_DIGITS:
                yield self._scan_run(TokenType.NUMBER, lambda c: c in ASCII_DIGITS)
                continue

            yield self._scan_run(TokenType.TEXT, lambda c: c not in TEXT_STOP)

        yield Token(TokenType.EOF, "", self._position())

    # =========================================================================
    # Scanning helpers
    # =========================================================================

    def _position(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _scan_run(self, token_type: TokenType, accepts: Callable[[str], bool]) -> Token:
        """Consume the maximal run of characters satisfying ``accepts``.

        The first character is already known to match, so the run is never
        empty and the scan always advances.
        """
        start = self._position()
        begin = self._pos
        end = begin + 1
        source = self._source
        while end < self._source_len and accepts(source[end]):
            end += 1
        self._consume(end - begin)
        return Token(token_type, source[begin:end], start)

    def _consume(self, count: int) -> None:
        """Advance ``count`` characters, updating line and column."""
        segment = self._source[self._pos : self._pos + count]
        newline_count = segment.count("\n")
        if newline_count:
            self._line += newline_count
            self._col = len(segment) - segment.rfind("\n") - 1
        else:
            self._col += len(segment)
        self._pos += len(segment)


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source`` into a list ending with one EOF token."""
    return list(Lexer(source).tokenize())
