"""Traversal and query engine over marktree ASTs.

Every consumer of the tree (analyzer, highlighter, renderer, visitors)
reaches nodes through the functions here rather than reimplementing
descent. Trees are immutable, so all queries are pure functions of the
root; the ``Walker`` class is only a convenience holder for a root.

Traversal uses an explicit stack, so the depth cap (``MAX_DEPTH``) is
the only limit on tree depth, not the interpreter's recursion limit.

Example:
    >>> doc = parse("# Title\\n\\ntext\\n")
    >>> [h.text for h in find_headings(doc)]
    ['Title']
    >>> count_nodes(doc, NodeKind.PARAGRAPH)
    1

Thread Safety:
    All functions are pure; ``Walker`` holds no mutable state.

"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterator
from enum import Enum

from marktree.location import Position
from marktree.nodes import (
    CodeBlock,
    Heading,
    List,
    Node,
    NodeKind,
    Paragraph,
    children_of,
)
from marktree.utils.logger import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 1000


class Order(Enum):
    """Traversal order: parent before children (PRE) or after (POST)."""

    PRE = "pre"
    POST = "post"


def walk(
    root: Node,
    order: Order = Order.PRE,
    max_depth: int = MAX_DEPTH,
) -> Iterator[Node]:
    """Yield every node reachable from ``root`` in the given order.

    The root is at depth 0. Nodes deeper than ``max_depth`` are not
    visited; the truncation is logged at DEBUG level.
    """
    if order is Order.PRE:
        return _walk_pre(root, max_depth)
    return _walk_post(root, max_depth)


def _walk_pre(root: Node, max_depth: int) -> Iterator[Node]:
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node
        children = children_of(node)
        if not children:
            continue
        if depth >= max_depth:
            logger.debug("depth cap %d reached at %s; children skipped", max_depth, node.kind)
            continue
        stack.extend((child, depth + 1) for child in reversed(children))


def _walk_post(root: Node, max_depth: int) -> Iterator[Node]:
    # Each entry: node, depth, whether its children were already pushed
    stack: list[tuple[Node, int, bool]] = [(root, 0, False)]
    while stack:
        node, depth, expanded = stack.pop()
        children = children_of(node)
        if expanded or not children:
            yield node
            continue
        if depth >= max_depth:
            logger.debug("depth cap %d reached at %s; children skipped", max_depth, node.kind)
            yield node
            continue
        stack.append((node, depth, True))
        stack.extend((child, depth + 1, False) for child in reversed(children))


def visit(
    root: Node,
    visitor: Callable[[Node], object],
    order: Order = Order.PRE,
    max_depth: int = MAX_DEPTH,
) -> None:
    """Call ``visitor`` once for every node, in traversal order."""
    for node in walk(root, order, max_depth):
        visitor(node)


# =============================================================================
# Queries
# =============================================================================


def filter_nodes(root: Node, predicate: Callable[[Node], bool]) -> list[Node]:
    """All nodes satisfying ``predicate``, in document order."""
    return [node for node in walk(root) if predicate(node)]


def find_all(root: Node, kind: NodeKind) -> list[Node]:
    """All nodes of ``kind``, in document order."""
    return [node for node in walk(root) if node.kind == kind]


def find_headings(root: Node) -> list[Heading]:
    return [node for node in walk(root) if isinstance(node, Heading)]


def find_code_blocks(root: Node) -> list[CodeBlock]:
    return [node for node in walk(root) if isinstance(node, CodeBlock)]


def find_paragraphs(root: Node) -> list[Paragraph]:
    return [node for node in walk(root) if isinstance(node, Paragraph)]


def find_lists(root: Node) -> list[List]:
    return [node for node in walk(root) if isinstance(node, List)]


def contains(node: Node, line: int, column: int) -> bool:
    """Whether (line, column) falls inside ``node``'s span.

    Lines strictly between start and end are contained regardless of
    column; on the boundary lines the column is checked against the
    corresponding endpoint. Unpositioned nodes contain nothing.
    """
    start, end = node.start_pos, node.end_pos
    if start is None or end is None:
        return False
    if not start.line <= line <= end.line:
        return False
    if line == start.line and column < start.column:
        return False
    if line == end.line and column > end.column:
        return False
    return True


def find_by_position(root: Node, line: int, column: int) -> Node | None:
    """The innermost node containing (line, column), or None.

    Scans in pre-order; the last containing node wins, which for
    nested spans is the deepest one.
    """
    found: Node | None = None
    for node in walk(root):
        if contains(node, line, column):
            found = node
    return found


def find_at(root: Node, position: Position) -> Node | None:
    """``find_by_position`` taking a Position."""
    return find_by_position(root, position.line, position.column)


def count_nodes(root: Node, kind: NodeKind) -> int:
    """Number of nodes of ``kind`` reachable from ``root``."""
    return sum(1 for node in walk(root) if node.kind == kind)


def count_by_kind(root: Node) -> Counter[NodeKind]:
    """Tally of every node kind in one pass."""
    return Counter(node.kind for node in walk(root))


class Walker:
    """Query façade bound to one root node.

    Stateless: every method recomputes from the root, so calling the same
    query twice gives the same answer.
    """

    __slots__ = ("root",)

    def __init__(self, root: Node) -> None:
        self.root = root

    def walk(self, order: Order = Order.PRE) -> Iterator[Node]:
        return walk(self.root, order)

    def visit(self, visitor: Callable[[Node], object], order: Order = Order.PRE) -> None:
        visit(self.root, visitor, order)

    def find_all(self, kind: NodeKind) -> list[Node]:
        return find_all(self.root, kind)

    def find_headings(self) -> list[Heading]:
        return find_headings(self.root)

    def find_code_blocks(self) -> list[CodeBlock]:
        return find_code_blocks(self.root)

    def find_paragraphs(self) -> list[Paragraph]:
        return find_paragraphs(self.root)

    def find_lists(self) -> list[List]:
        return find_lists(self.root)

    def filter(self, predicate: Callable[[Node], bool]) -> list[Node]:
        return filter_nodes(self.root, predicate)

    def find_by_position(self, line: int, column: int) -> Node | None:
        return find_by_position(self.root, line, column)

    def find_at(self, position: Position) -> Node | None:
        return find_at(self.root, position)

    def count_nodes(self, kind: NodeKind) -> int:
        return count_nodes(self.root, kind)

    def count_by_kind(self) -> Counter[NodeKind]:
        return count_by_kind(self.root)
