"""Tests for block parsing: dispatch, node text and positions."""

import pytest

from marktree import parse, parse_with_diagnostics
from marktree.errors import InvalidInputError
from marktree.location import Position
from marktree.nodes import (
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    List,
    ListItem,
    Paragraph,
)
from marktree.parser import ParseResult, Parser


class TestDocument:
    """Top-level document shape."""

    def test_empty_input(self) -> None:
        doc = parse("")
        assert isinstance(doc, Document)
        assert doc.children == ()

    def test_blank_lines_only(self) -> None:
        assert parse("\n\n\n").children == ()

    def test_whitespace_only_line(self) -> None:
        assert parse("   \n").children == ()

    def test_document_spans_whole_source(self) -> None:
        source = "# T\ntext\n"
        doc = parse(source)
        assert doc.start_pos == Position.zero()
        assert doc.end_pos == Position(2, 0, len(source))

    def test_parse_result_shape(self) -> None:
        result = Parser("x").parse()
        assert isinstance(result, ParseResult)
        assert result.diagnostics == ()

    def test_non_str_input_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            Parser(b"# bytes")  # type: ignore[arg-type]

    def test_parse_with_diagnostics_default_empty(self) -> None:
        result = parse_with_diagnostics("```py\nunclosed")
        assert result.diagnostics == ()
        assert isinstance(result.document.children[0], CodeBlock)


class TestHeadings:
    """ATX headings."""

    @pytest.mark.parametrize("n", range(1, 9))
    def test_heading_law(self, n: int) -> None:
        doc = parse("#" * n + " Title here\n")
        (heading,) = doc.children
        assert isinstance(heading, Heading)
        assert heading.level == min(n, 6)
        assert heading.text == "Title here"

    def test_no_space_after_marker(self) -> None:
        (heading,) = parse("#Title").children
        assert heading == Heading(
            1, "Title", start_pos=Position(0, 0, 0), end_pos=Position(0, 6, 6)
        )

    def test_text_with_digits_and_markers(self) -> None:
        (heading,) = parse("## Step 2: done.\n").children
        assert heading.text == "Step 2: done."

    def test_heading_span_ends_after_newline(self) -> None:
        (heading, para) = parse("# Title\nPara\n").children
        assert heading.start_pos == Position(0, 0, 0)
        assert heading.end_pos == Position(1, 0, 8)
        assert para.start_pos == Position(1, 0, 8)
        assert para.end_pos == Position(2, 0, 13)

    def test_empty_heading(self) -> None:
        (heading,) = parse("#\n").children
        assert heading.text == ""
        assert heading.level == 1


class TestCodeBlocks:
    """Fenced code."""

    def test_fence_preservation(self) -> None:
        (block,) = parse("```lang\nLINE1\nLINE2\n```").children
        assert block == CodeBlock(
            "lang",
            "LINE1\nLINE2\n",
            start_pos=Position(0, 0, 0),
            end_pos=Position(3, 3, 23),
        )

    def test_body_kept_verbatim(self) -> None:
        source = "```md\n# not a heading\n- not a list\n  <b>&amp;</b>\n```\n"
        (block,) = parse(source).children
        assert block.code == "# not a heading\n- not a list\n  <b>&amp;</b>\n"

    def test_language_is_trimmed(self) -> None:
        (block,) = parse("```  python  \nx\n```\n").children
        assert block.language == "python"

    def test_missing_language_defaults_to_text(self) -> None:
        (block,) = parse("```\ncode\n```\n").children
        assert block.language == "text"

    def test_unterminated_fence_runs_to_eof(self) -> None:
        (block,) = parse("```py\nx = 1\n").children
        assert block.code == "x = 1\n"
        assert block.end_pos == Position(2, 0, 12)

    def test_content_after_fence_continues(self) -> None:
        children = parse("```\na\n```\nafter\n").children
        assert [type(c) for c in children] == [CodeBlock, Paragraph]
        assert children[1].text == "after"


class TestLists:
    """Ordered and unordered lists."""

    def test_list_homogeneity(self) -> None:
        first, second = parse("- a\n- b\n1. c").children
        assert isinstance(first, List) and isinstance(second, List)
        assert first.ordered is False
        assert [item.text for item in first.items] == ["a", "b"]
        assert second.ordered is True
        assert [item.text for item in second.items] == ["c"]

    def test_mixed_bullets_share_a_list(self) -> None:
        (lst,) = parse("- a\n* b\n+ c\n").children
        assert [item.text for item in lst.items] == ["a", "b", "c"]

    def test_ordered_list(self) -> None:
        (lst,) = parse("1. one\n2. two\n10. ten\n").children
        assert lst.ordered is True
        assert [item.text for item in lst.items] == ["one", "two", "ten"]

    def test_item_positions(self) -> None:
        (lst,) = parse("- x\n- y\n").children
        assert lst.items[0] == ListItem(
            "x", start_pos=Position(0, 0, 0), end_pos=Position(1, 0, 4)
        )
        assert lst.items[1].start_pos == Position(1, 0, 4)
        assert lst.end_pos == Position(2, 0, 8)

    def test_blank_line_ends_list(self) -> None:
        children = parse("- a\n\n- b\n").children
        assert len(children) == 2

    def test_number_without_dot_is_paragraph(self) -> None:
        (para,) = parse("2024 was good\n").children
        assert isinstance(para, Paragraph)
        assert para.text == "2024 was good"

    def test_item_text_is_literal(self) -> None:
        (lst,) = parse("- use **bold** and `code`\n").children
        assert lst.items[0].text == "use **bold** and `code`"
        assert lst.items[0].children == ()


class TestBlockquotes:
    """Quoted lines."""

    def test_quote_wraps_positioned_paragraph(self) -> None:
        (quote,) = parse("> quoted\n").children
        assert quote == Blockquote(
            (
                Paragraph(
                    "quoted", start_pos=Position(0, 2, 2), end_pos=Position(1, 0, 9)
                ),
            ),
            start_pos=Position(0, 0, 0),
            end_pos=Position(1, 0, 9),
        )

    def test_each_line_is_its_own_quote(self) -> None:
        children = parse("> a\n> b\n").children
        assert [type(c) for c in children] == [Blockquote, Blockquote]
        assert [c.children[0].text for c in children] == ["a", "b"]


class TestParagraphs:
    """Paragraph boundaries."""

    def test_each_line_is_a_paragraph(self) -> None:
        children = parse("one\ntwo\n").children
        assert [c.text for c in children] == ["one", "two"]

    def test_text_is_literal(self) -> None:
        (para,) = parse("Some `code` [link](u) text").children
        assert para.text == "Some `code` [link](u) text"
        assert para.children == ()

    def test_hash_ends_paragraph(self) -> None:
        para, heading = parse("intro # not heading\n").children
        assert para.text == "intro "
        assert isinstance(heading, Heading)
        assert heading.text == "not heading"

    def test_bullet_ends_paragraph(self) -> None:
        para, lst = parse("a - b\n").children
        assert para.text == "a "
        assert isinstance(lst, List)
        assert lst.items[0].text == "b"

    def test_fence_ends_paragraph(self) -> None:
        para, block = parse("text ```py\ncode\n```\n").children
        assert para.text == "text "
        assert block == CodeBlock(
            "py", "code\n", start_pos=Position(0, 5, 5), end_pos=Position(3, 0, 20)
        )


class TestPositionInvariants:
    """Structural position guarantees."""

    SOURCE = "# A\n\nText\n\n```py\ncode\n```\n- x\n- y\n> q\n1. z\n"

    def test_all_blocks_positioned(self) -> None:
        doc = parse(self.SOURCE)
        assert all(child.is_positioned for child in doc.children)

    def test_siblings_do_not_overlap(self) -> None:
        children = parse(self.SOURCE).children
        for before, after in zip(children, children[1:]):
            assert before.end_pos <= after.start_pos

    def test_parse_is_deterministic(self) -> None:
        assert parse(self.SOURCE) == parse(self.SOURCE)
