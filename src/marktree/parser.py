"""Recursive descent parser producing a typed, positioned AST.

Consumes the token stream from the Lexer and builds immutable (frozen)
dataclass nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `BlockParsingMixin`: Block dispatch and single-line blocks
- `ListParsingMixin`: List runs
- `InlineParsingMixin`: Optional inline markup pass

Thread Safety:
- Parser instances are single-use and not thread-safe
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable and safe to share across threads

"""

from __future__ import annotations

from typing import NamedTuple

from marktree.config import ParseConfig, get_parse_config
from marktree.errors import Diagnostic, InvalidInputError
from marktree.lexer import Lexer
from marktree.location import Position
from marktree.nodes import Block, Document
from marktree.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    ListParsingMixin,
    TokenNavigationMixin,
)
from marktree.tokens import Token, TokenType
from marktree.utils.logger import get_logger

logger = get_logger(__name__)


class ParseResult(NamedTuple):
    """Document plus the diagnostics gathered while building it.

    ``diagnostics`` is empty unless strict parsing is enabled.
    """

    document: Document
    diagnostics: tuple[Diagnostic, ...] = ()


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    ListParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for markdown.

    Usage:
        >>> result = Parser("# Hello\\n\\nWorld").parse()
        >>> result.document.children[0].text
        'Hello'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = (
        "_source",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_diagnostics",
    )

    def __init__(self, source: str) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text

        Raises:
            InvalidInputError: If ``source`` is not a ``str``.

        """
        if not isinstance(source, str):
            msg = f"markdown source must be str, got {type(source).__name__}"
            raise InvalidInputError(msg)
        self._source = source
        self._tokens: list[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._current: Token = Token(TokenType.EOF, "", Position.zero())
        self._diagnostics: list[Diagnostic] = []

    # =========================================================================
    # Configuration Properties (read from ContextVar)
    # =========================================================================

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _strict(self) -> bool:
        """Whether degraded constructs are reported as diagnostics."""
        return self._config.strict

    def parse(self) -> ParseResult:
        """Parse source into a Document.

        Never raises for any ``str`` input; an empty or blank source gives a
        Document with no children.

        Returns:
            ParseResult with the Document and any diagnostics
        """
        self._tokens = list(Lexer(self._source).tokenize())
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0]
        self._diagnostics = []

        blocks: list[Block] = []
        while not self._at_end():
            if self._current.type is TokenType.NEWLINE:
                self._advance()  # Skip blank lines
                continue
            block = self._parse_block()
            if block is not None:
                blocks.append(block)

        document = Document(
            tuple(blocks),
            start_pos=Position.zero(),
            end_pos=self._here(),
        )
        logger.debug(
            "parsed %d chars into %d blocks (%d diagnostics)",
            len(self._source),
            len(blocks),
            len(self._diagnostics),
        )
        return ParseResult(document, tuple(self._diagnostics))

    def _diagnose(self, code: str, message: str, position: Position) -> None:
        """Record a degraded construct.

        Always logged at DEBUG; kept as a Diagnostic only in strict mode.
        """
        logger.debug("%s at %s: %s", code, position, message)
        if self._strict:
            self._diagnostics.append(Diagnostic(message, position, code))
