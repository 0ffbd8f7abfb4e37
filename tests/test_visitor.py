"""Tests for the AST visitor and transform utilities."""

import dataclasses

import pytest

from marktree import parse
from marktree.config import ParseConfig, parse_config_context
from marktree.location import Position
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
)
from marktree.visitor import BaseVisitor, transform


def _doc(*blocks: Node) -> Document:
    return Document(children=tuple(blocks))


# =============================================================================
# Visitor dispatch tests
# =============================================================================


class NodeCollector(BaseVisitor[None]):
    """Collects all visited node type names."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def visit_default(self, node) -> None:  # type: ignore[override]
        self.visited.append(type(node).__name__)


class TestVisitorDispatch:
    """Tests that every node type dispatches to its visit_* method."""

    def test_visits_every_node_in_pre_order(self) -> None:
        doc = _doc(
            Heading(1, "t", (Bold("b"),)),
            Paragraph("p", (InlineCode("c"), Italic("i"), Link("l", "u"))),
            CodeBlock("py", "x"),
            List(False, (ListItem("a"),)),
            Blockquote((Paragraph("q"),)),
            HorizontalRule(),
        )
        collector = NodeCollector()
        collector.visit(doc)
        assert collector.visited == [
            "Document",
            "Heading",
            "Bold",
            "Paragraph",
            "InlineCode",
            "Italic",
            "Link",
            "CodeBlock",
            "List",
            "ListItem",
            "Blockquote",
            "Paragraph",
            "HorizontalRule",
        ]

    @pytest.mark.parametrize(
        ("node", "method"),
        [
            (Document(), "visit_document"),
            (Heading(1, "x"), "visit_heading"),
            (Paragraph("x"), "visit_paragraph"),
            (CodeBlock(), "visit_code_block"),
            (List(True), "visit_list"),
            (ListItem("x"), "visit_list_item"),
            (Blockquote(), "visit_blockquote"),
            (HorizontalRule(), "visit_horizontal_rule"),
            (InlineCode("x"), "visit_inline_code"),
            (Bold("x"), "visit_bold"),
            (Italic("x"), "visit_italic"),
            (Link("x", "u"), "visit_link"),
        ],
    )
    def test_specific_method_called(self, node: Node, method: str) -> None:
        calls: list[str] = []

        class Recorder(BaseVisitor[None]):
            pass

        def record(self, n):  # type: ignore[no-untyped-def]
            calls.append(method)

        setattr(Recorder, method, record)
        Recorder().visit(node)
        assert calls == [method]

    def test_visit_returns_root_result(self) -> None:
        class KindNamer(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return node.kind.value

        assert KindNamer().visit(_doc(Paragraph("x"))) == "document"

    def test_default_returns_none(self) -> None:
        assert BaseVisitor().visit(Paragraph("x")) is None

    def test_override_one_kind(self) -> None:
        class HeadingCollector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.headings: list[Heading] = []

            def visit_heading(self, node: Heading) -> None:
                self.headings.append(node)

        collector = HeadingCollector()
        collector.visit(parse("# A\ntext\n## B\n"))
        assert [h.text for h in collector.headings] == ["A", "B"]

    def test_respects_configured_depth(self) -> None:
        node: Node = Paragraph("leaf")
        for _ in range(10):
            node = Blockquote((node,))
        collector = NodeCollector()
        with parse_config_context(ParseConfig(max_depth=3)):
            collector.visit(node)
        assert len(collector.visited) == 4


# =============================================================================
# Transform tests
# =============================================================================


class TestTransform:
    """Immutable bottom-up rewriting."""

    def test_identity_returns_equal_tree(self) -> None:
        doc = parse("# A\n- x\n> q\n")
        assert transform(doc, lambda n: n) == doc

    def test_demote_headings(self) -> None:
        doc = parse("# A\n###### F\n")

        def demote(node: Node) -> Node:
            if isinstance(node, Heading):
                return dataclasses.replace(node, level=node.level + 1)
            return node

        new_doc = transform(doc, demote)
        assert [h.level for h in new_doc.children] == [2, 6]
        assert [h.level for h in doc.children] == [1, 6]

    def test_remove_nodes(self) -> None:
        doc = parse("# A\ntext\n- x\n- y\n")

        def drop(node: Node) -> Node | None:
            if isinstance(node, Paragraph):
                return None
            if isinstance(node, ListItem) and node.text == "x":
                return None
            return node

        new_doc = transform(doc, drop)
        assert [type(c) for c in new_doc.children] == [Heading, List]
        assert [i.text for i in new_doc.children[1].items] == ["y"]

    def test_children_transformed_before_parent(self) -> None:
        seen: list[str] = []

        def record(node: Node) -> Node:
            seen.append(type(node).__name__)
            return node

        transform(_doc(Blockquote((Paragraph("q"),))), record)
        assert seen == ["Paragraph", "Blockquote", "Document"]

    def test_positions_kept(self) -> None:
        doc = parse("> q\n")
        new_doc = transform(doc, lambda n: n)
        assert new_doc.children[0].start_pos == Position.zero()

    def test_root_removal_rejected(self) -> None:
        with pytest.raises(TypeError):
            transform(_doc(), lambda n: None)
