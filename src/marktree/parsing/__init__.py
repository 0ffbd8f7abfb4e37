"""Parsing subsystem for the marktree parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `BlockParsingMixin`: Block dispatch, headings, code, quotes, paragraphs
- `ListParsingMixin`: Ordered and unordered lists
- `InlineParsingMixin`: Optional inline markup pass

Example:
    >>> from marktree.parsing import (
    ...     TokenNavigationMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, BlockParsingMixin, ...):
    ...     pass

"""

from marktree.parsing.blocks import BlockParsingMixin
from marktree.parsing.inline import InlineParsingMixin, parse_inline, scan_inline
from marktree.parsing.lists import ListParsingMixin
from marktree.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "BlockParsingMixin",
    "ListParsingMixin",
    "InlineParsingMixin",
    "parse_inline",
    "scan_inline",
]
