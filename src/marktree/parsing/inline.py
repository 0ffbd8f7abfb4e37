"""Inline markup pass for marktree.

A separate, additive pass over the raw text of headings and paragraphs.
Block parsing never depends on it; it only fills the ``children`` of
Heading and Paragraph nodes when ``ParseConfig.inline_markup`` is set.

Recognized spans (one level only, contents are literal):
- `code`              -> InlineCode
- **text** / __text__ -> Bold
- *text* / _text_     -> Italic
- [text](url)         -> Link

Emphasis content may not start or end with whitespace, so "a * b * c"
stays plain text. Unmatched delimiters are plain text.

Text handed to this pass never contains a newline, so node positions are
plain column offsets from the text's first character.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from marktree.config import ParseConfig
from marktree.nodes import Bold, Inline, InlineCode, Italic, Link

if TYPE_CHECKING:
    from marktree.location import Position


@dataclass(frozen=True, slots=True)
class InlineMatch:
    """An inline span found in a line of text.

    Attributes:
        start: Index of the opening delimiter
        end: Index just past the closing delimiter
        node: Unpositioned inline node for the span

    """

    start: int
    end: int
    node: Inline


def scan_inline(text: str) -> Iterator[InlineMatch]:
    """Yield non-overlapping inline spans of ``text`` left to right."""
    pos = 0
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        match: InlineMatch | None = None
        if char == "`":
            match = _match_code(text, pos)
        elif char in "*_":
            match = _match_emphasis(text, pos, char)
        elif char == "[":
            match = _match_link(text, pos)

        if match is None:
            pos += 1
            continue
        yield match
        pos = match.end


def parse_inline(text: str, origin: Position) -> tuple[Inline, ...]:
    """Return positioned inline nodes for ``text`` starting at ``origin``."""
    return tuple(
        dataclasses.replace(
            m.node,
            start_pos=origin.shifted(m.start),
            end_pos=origin.shifted(m.end),
        )
        for m in scan_inline(text)
    )


def _match_code(text: str, pos: int) -> InlineMatch | None:
    close = text.find("`", pos + 1)
    if close <= pos + 1:
        return None
    return InlineMatch(pos, close + 1, InlineCode(text[pos + 1 : close]))


def _match_emphasis(text: str, pos: int, char: str) -> InlineMatch | None:
    double = char * 2
    if text.startswith(double, pos):
        close = text.find(double, pos + 2)
        content = text[pos + 2 : close] if close != -1 else ""
        if _is_emphasis_content(content):
            return InlineMatch(pos, close + 2, Bold(content))

    close = text.find(char, pos + 1)
    if close == -1:
        return None
    content = text[pos + 1 : close]
    if not _is_emphasis_content(content):
        return None
    return InlineMatch(pos, close + 1, Italic(content))


def _is_emphasis_content(content: str) -> bool:
    return bool(content) and not content[0].isspace() and not content[-1].isspace()


def _match_link(text: str, pos: int) -> InlineMatch | None:
    close_bracket = text.find("]", pos + 1)
    if close_bracket <= pos + 1 or not text.startswith("(", close_bracket + 1):
        return None
    close_paren = text.find(")", close_bracket + 2)
    if close_paren == -1:
        return None
    label = text[pos + 1 : close_bracket]
    url = text[close_bracket + 2 : close_paren].strip()
    return InlineMatch(pos, close_paren + 1, Link(label, url))


class InlineParsingMixin:
    """Mixin running the inline pass when the active config enables it.

    Required Host Properties:
        - _config: ParseConfig

    """

    _config: ParseConfig

    def _parse_inline(self, text: str, origin: Position) -> tuple[Inline, ...]:
        if not self._config.inline_markup:
            return ()
        return parse_inline(text, origin)
