"""AST Visitor and Transformer for marktree.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen ASTs.

Example, collecting all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit(doc)

Example, demoting every heading:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=node.level + 1)
        return node

    new_doc = transform(doc, demote)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure and safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable

from marktree.config import get_parse_config
from marktree.nodes import (
    Blockquote,
    Bold,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    InlineCode,
    Italic,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    children_of,
    owns_children,
)
from marktree.walker import Order, walk


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Descendants are
    visited in pre-order after the root, down to the configured
    ``ParseConfig.max_depth``.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch ``node`` and then every descendant.

        Returns the result of dispatching ``node`` itself.

        """
        nodes = walk(node, Order.PRE, get_parse_config().max_depth)
        result = self._dispatch(next(nodes))
        for descendant in nodes:
            self._dispatch(descendant)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_blockquote(self, node: Blockquote) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_inline_code(self, node: InlineCode) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_italic(self, node: Italic) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case Blockquote():
                return self.visit_blockquote(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case InlineCode():
                return self.visit_inline_code(node)
            case Bold():
                return self.visit_bold(node)
            case Italic():
                return self.visit_italic(node)
            case Link():
                return self.visit_link(node)
            case _:
                return self.visit_default(node)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied. ``doc`` is untouched.

    """
    result = _transform_node(doc, fn)
    if not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    if owns_children(node.kind):
        children = children_of(node)
        new_children = tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )
        if new_children != children:
            field_name = "items" if isinstance(node, List) else "children"
            node = dataclasses.replace(node, **{field_name: new_children})
    return fn(node)
