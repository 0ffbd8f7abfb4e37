"""Typed AST nodes for marktree.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads, no cycles possible
- Pattern matching: match statements work naturally

Node set (closed):
Node (base)
├── Document
├── Heading
├── Paragraph
├── CodeBlock
├── List
├── ListItem
├── Blockquote
├── HorizontalRule
└── inline: InlineCode, Bold, Italic, Link

Every node carries optional ``start_pos``/``end_pos``. The parser always
sets both; hand-built trees may leave them unset.

Child access is explicit rather than a silent "no children" fallback:
``owns_children(kind)`` says whether a kind has a child collection,
``children_of(node)`` returns it, and ``add_child(node, child)`` raises
UnsupportedOperationError for leaf kinds.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from marktree.errors import UnsupportedOperationError
from marktree.location import Position


class NodeKind(StrEnum):
    """Discriminator for the closed set of node variants."""

    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    LIST = "list"
    LIST_ITEM = "list_item"
    INLINE_CODE = "inline_code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontal_rule"


# Kinds that own a child collection, mapped to the field holding it
_CHILD_FIELDS: dict[NodeKind, str] = {
    NodeKind.DOCUMENT: "children",
    NodeKind.HEADING: "children",
    NodeKind.PARAGRAPH: "children",
    NodeKind.LIST: "items",
    NodeKind.LIST_ITEM: "children",
    NodeKind.BLOCKQUOTE: "children",
}

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
DEFAULT_CODE_LANGUAGE = "text"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    Positions are keyword-only so subclasses can declare their payload
    fields positionally.

    """

    kind: ClassVar[NodeKind]

    start_pos: Position | None = field(default=None, kw_only=True)
    end_pos: Position | None = field(default=None, kw_only=True)

    @property
    def is_positioned(self) -> bool:
        """True when both start and end positions are set."""
        return self.start_pos is not None and self.end_pos is not None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class InlineCode(Node):
    """Inline code.

    Markdown: `code`

    """

    kind: ClassVar[NodeKind] = NodeKind.INLINE_CODE

    text: str


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """Strong text.

    Markdown: **text** or __text__

    """

    kind: ClassVar[NodeKind] = NodeKind.BOLD

    text: str


@dataclass(frozen=True, slots=True)
class Italic(Node):
    """Emphasized text.

    Markdown: *text* or _text_

    """

    kind: ClassVar[NodeKind] = NodeKind.ITALIC

    text: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url)

    """

    kind: ClassVar[NodeKind] = NodeKind.LINK

    text: str
    url: str


type Inline = InlineCode | Bold | Italic | Link


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: # Heading

    ``level`` is clamped into [1, 6] at construction. ``children`` holds
    inline nodes and stays empty unless the inline pass is enabled.

    """

    kind: ClassVar[NodeKind] = NodeKind.HEADING

    level: int
    text: str
    children: tuple[Inline, ...] = ()

    def __post_init__(self) -> None:
        clamped = max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, self.level))
        if clamped != self.level:
            object.__setattr__(self, "level", clamped)


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    ``text`` is the raw line content; ``children`` holds inline nodes.

    """

    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH

    text: str
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced code block.

    Markdown: ```lang\\ncode\\n```

    ``code`` is the verbatim body. An empty language becomes "text".

    """

    kind: ClassVar[NodeKind] = NodeKind.CODE_BLOCK

    language: str = DEFAULT_CODE_LANGUAGE
    code: str = ""

    def __post_init__(self) -> None:
        if not self.language:
            object.__setattr__(self, "language", DEFAULT_CODE_LANGUAGE)


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    ``text`` is the literal line content after the marker. ``children``
    is reserved for nested blocks and is never filled by the parser.

    """

    kind: ClassVar[NodeKind] = NodeKind.LIST_ITEM

    text: str
    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    Markdown: - item or 1. item

    """

    kind: ClassVar[NodeKind] = NodeKind.LIST

    ordered: bool
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True, slots=True)
class Blockquote(Node):
    """Block quote.

    Markdown: > quoted text

    The parser emits one Blockquote per quoted line, wrapping a Paragraph.

    """

    kind: ClassVar[NodeKind] = NodeKind.BLOCKQUOTE

    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class HorizontalRule(Node):
    """Thematic break. Part of the model; the parser does not emit it yet."""

    kind: ClassVar[NodeKind] = NodeKind.HORIZONTAL_RULE


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node.

    Contains all top-level blocks in source order.

    """

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT

    children: tuple[Block, ...] = ()


type Block = Heading | Paragraph | CodeBlock | List | ListItem | Blockquote | HorizontalRule

type AnyNode = Document | Block | Inline


# =============================================================================
# Child access
# =============================================================================


def owns_children(kind: NodeKind) -> bool:
    """Whether nodes of ``kind`` carry a child collection."""
    return kind in _CHILD_FIELDS


def children_of(node: Node) -> tuple[Node, ...]:
    """Return the child collection of ``node`` in source order.

    Leaf kinds have nothing to traverse and yield the empty tuple; use
    ``owns_children`` to tell a leaf from an empty container.
    """
    match node:
        case List(items=items):
            return items
        case Document(children=children) | Blockquote(children=children):
            return children
        case Heading(children=children) | Paragraph(children=children):
            return children
        case ListItem(children=children):
            return children
        case _:
            return ()


def add_child[N: Node](node: N, child: Node) -> N:
    """Return a copy of ``node`` with ``child`` appended.

    Nodes are immutable, so this never modifies ``node``.

    Raises:
        UnsupportedOperationError: If ``node``'s kind has no child collection.

    """
    field_name = _CHILD_FIELDS.get(node.kind)
    if field_name is None:
        raise UnsupportedOperationError(node.kind.value)
    current = getattr(node, field_name)
    return dataclasses.replace(node, **{field_name: (*current, child)})


NODE_TYPES: dict[NodeKind, type[Node]] = {
    NodeKind.DOCUMENT: Document,
    NodeKind.HEADING: Heading,
    NodeKind.PARAGRAPH: Paragraph,
    NodeKind.CODE_BLOCK: CodeBlock,
    NodeKind.LIST: List,
    NodeKind.LIST_ITEM: ListItem,
    NodeKind.INLINE_CODE: InlineCode,
    NodeKind.BOLD: Bold,
    NodeKind.ITALIC: Italic,
    NodeKind.LINK: Link,
    NodeKind.BLOCKQUOTE: Blockquote,
    NodeKind.HORIZONTAL_RULE: HorizontalRule,
}
