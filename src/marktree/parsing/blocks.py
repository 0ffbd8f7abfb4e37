"""Block parsing for the marktree parser.

Provides block dispatch and the heading, fenced code, blockquote and
paragraph rules. Lists live in ``marktree.parsing.lists``.

Every rule consumes at least one token, so the block loop always makes
progress. Malformed constructs are never rejected: they degrade to the
best node that can be built from what was consumed, and the degradation
is reported through ``_diagnose``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from marktree.nodes import (
    MAX_HEADING_LEVEL,
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    Paragraph,
)
from marktree.tokens import BULLET_TYPES, TokenType

if TYPE_CHECKING:
    from marktree.location import Position
    from marktree.nodes import Inline


# Tokens that end a paragraph, including mid-line '#' and bullets.
# The inline pass never changes them.
PARAGRAPH_BREAKS: frozenset[TokenType] = frozenset(
    {TokenType.NEWLINE, TokenType.HASH, TokenType.TRIPLE_BACKTICK} | BULLET_TYPES
)
_FENCE_END: frozenset[TokenType] = frozenset({TokenType.TRIPLE_BACKTICK})


class BlockParsingMixin:
    """Block dispatch and single-line block rules.

    Required Host Attributes:
        - _current: Token

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token
        - _peek_type(offset) -> TokenType
        - _here() -> Position
        - _skip_spaces() -> None
        - _collect_line() -> str
        - _collect_until(stop) -> str
        - _consume_newline() -> bool
        - _parse_inline(text, origin) -> tuple[Inline, ...]
        - _parse_list(ordered) -> List
        - _diagnose(code, message, position) -> None

    """

    def _parse_block(self) -> Block | None:
        """Parse a single block element.

        Returns None at EOF and for paragraphs that turn out blank.
        """
        token = self._current

        match token.type:
            case TokenType.HASH:
                return self._parse_heading()

            case TokenType.TRIPLE_BACKTICK:
                return self._parse_code_block()

            case TokenType.DASH | TokenType.ASTERISK | TokenType.PLUS:
                return self._parse_list(ordered=False)

            case TokenType.NUMBER if self._peek_type(1) is TokenType.DOT:
                return self._parse_list(ordered=True)

            case TokenType.GT:
                return self._parse_blockquote()

            case TokenType.EOF:
                return None

            case _:
                return self._parse_paragraph()

    def _parse_heading(self) -> Heading:
        """Parse an ATX heading: run of '#', spaces, text to end of line."""
        start = self._here()

        level = 0
        while self._current.type is TokenType.HASH:
            level += 1
            self._advance()

        if level > MAX_HEADING_LEVEL:
            self._diagnose(
                "heading-level-clamped",
                f"heading with {level} markers clamped to level {MAX_HEADING_LEVEL}",
                start,
            )
            level = MAX_HEADING_LEVEL

        self._skip_spaces()
        text_start = self._here()
        text = self._collect_line()
        self._consume_newline()

        if not text.strip():
            self._diagnose("empty-heading", "heading has no text", start)

        return Heading(
            level,
            text,
            self._parse_inline(text, text_start),
            start_pos=start,
            end_pos=self._here(),
        )

    def _parse_code_block(self) -> CodeBlock:
        """Parse a fenced code block.

        The rest of the opening line is the language tag. Everything up to
        the closing fence is kept verbatim; an unterminated fence runs to EOF.
        """
        start = self._here()
        self._advance()  # opening ```

        language = self._collect_line().strip()
        self._consume_newline()

        code = self._collect_until(_FENCE_END)

        if self._current.type is TokenType.TRIPLE_BACKTICK:
            self._advance()
        else:
            self._diagnose("unterminated-fence", "code fence is never closed", start)
        self._consume_newline()

        return CodeBlock(language, code, start_pos=start, end_pos=self._here())

    def _parse_blockquote(self) -> Blockquote:
        """Parse one '>' line into a Blockquote wrapping a single Paragraph.

        Consecutive quoted lines are not merged; each yields its own node.
        """
        start = self._here()
        self._advance()  # >
        self._skip_spaces()

        text_start = self._here()
        text = self._collect_line()
        self._consume_newline()
        end = self._here()

        paragraph = Paragraph(
            text,
            self._parse_inline(text, text_start),
            start_pos=text_start,
            end_pos=end,
        )
        return Blockquote((paragraph,), start_pos=start, end_pos=end)

    def _parse_paragraph(self) -> Paragraph | None:
        """Parse a paragraph line.

        Stops at a newline, a fence, EOF, '#' or a bullet marker. Blank text
        produces no node.
        """
        start = self._here()
        text = self._collect_until(PARAGRAPH_BREAKS)
        self._consume_newline()

        if not text.strip():
            return None

        return Paragraph(
            text,
            self._parse_inline(text, start),
            start_pos=start,
            end_pos=self._here(),
        )
