"""Token navigation utilities for the marktree parser.

Provides mixin for token stream navigation and line-level consumption.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from marktree.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from marktree.location import Position


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    The token stream always ends with an EOF token, and ``_advance`` never
    moves past it, so ``_current`` is always a valid token.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens))
        - _pos: int
        - _current: Token

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current.type is TokenType.EOF

    def _advance(self) -> Token:
        """Consume the current token and return it."""
        token = self._current
        if token.type is not TokenType.EOF:
            self._pos += 1
            self._current = self._tokens[self._pos]
        return token

    def _peek_type(self, offset: int = 1) -> TokenType:
        """Type of the token ``offset`` places ahead (EOF past the end)."""
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos].type
        return TokenType.EOF

    def _here(self) -> Position:
        """Position of the current (not yet consumed) token."""
        return self._current.position

    def _skip_spaces(self) -> None:
        while self._current.type is TokenType.SPACE:
            self._advance()

    def _collect_until(self, stop: frozenset[TokenType]) -> str:
        """Concatenate token values until a token in ``stop`` or EOF."""
        parts: list[str] = []
        while self._current.type not in stop and self._current.type is not TokenType.EOF:
            parts.append(self._advance().value)
        return "".join(parts)

    def _collect_line(self) -> str:
        """Concatenate literal token values up to (not including) the newline."""
        return self._collect_until(_LINE_END)

    def _consume_newline(self) -> bool:
        """Consume a trailing newline if present."""
        if self._current.type is TokenType.NEWLINE:
            self._advance()
            return True
        return False


_LINE_END: frozenset[TokenType] = frozenset({TokenType.NEWLINE})
