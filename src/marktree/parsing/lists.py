"""List parsing for the marktree parser.

A list is a maximal run of consecutive item lines of one flavor:
unordered items start with '-', '*' or '+'; ordered items with a number
followed by '.'. The first line that does not match ends the list and is
left for the block loop. Item text is literal; it is not parsed again.
"""

from __future__ import annotations

from marktree.nodes import List, ListItem
from marktree.tokens import BULLET_TYPES, TokenType


class ListParsingMixin:
    """List parsing methods.

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token
        - _peek_type(offset) -> TokenType
        - _here() -> Position
        - _skip_spaces() -> None
        - _collect_line() -> str
        - _consume_newline() -> bool
        - _diagnose(code, message, position) -> None

    """

    def _parse_list(self, ordered: bool) -> List:
        """Parse consecutive items of one flavor into a List."""
        start = self._here()
        items: list[ListItem] = []

        while not self._at_end() and self._at_list_item(ordered):
            items.append(self._parse_list_item(ordered))

        return List(ordered, tuple(items), start_pos=start, end_pos=self._here())

    def _at_list_item(self, ordered: bool) -> bool:
        if ordered:
            return (
                self._current.type is TokenType.NUMBER
                and self._peek_type(1) is TokenType.DOT
            )
        return self._current.type in BULLET_TYPES

    def _parse_list_item(self, ordered: bool) -> ListItem:
        start = self._here()

        self._advance()  # number or bullet
        if ordered:
            self._advance()  # .
        self._skip_spaces()

        text = self._collect_line()
        self._consume_newline()

        if not text.strip():
            self._diagnose("empty-list-item", "list item has no text", start)

        return ListItem(text, start_pos=start, end_pos=self._here())
