"""HTML renderer using StringBuilder pattern.

Renders typed AST to HTML with O(n) performance using StringBuilder.

Escaping:
All text, languages and URLs are escaped for & < > " and '. The one
exception is a code block tagged "mermaid", whose body is emitted raw
inside ``<div class="mermaid">`` so a diagram renderer can pick it up.

Thread Safety:
HtmlRenderer holds no state. Each render() call uses its own
StringBuilder, so one renderer can be shared across threads.
"""

from __future__ import annotations

from marktree.nodes import (
    Blockquote,
    Bold,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Inline,
    InlineCode,
    Italic,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
)
from marktree.utils.logger import get_logger
from marktree.utils.stringbuilder import StringBuilder
from marktree.utils.text import escape_html

logger = get_logger(__name__)

MERMAID_LANGUAGE = "mermaid"


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> from marktree import parse
        >>> HtmlRenderer().render(parse("# Hello <World>"))
        '<h1>Hello &lt;World&gt;</h1>\\n'

    """

    __slots__ = ()

    def render(self, node: Node) -> str:
        """Render ``node`` (normally a Document) to an HTML string."""
        sb = StringBuilder()
        self._render_node(node, sb)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_node(self, node: Node, sb: StringBuilder) -> None:
        match node:
            case Document(children=children):
                for child in children:
                    self._render_node(child, sb)
            case Heading():
                sb.append(f"<h{node.level}>")
                self._render_text(node, sb)
                sb.append(f"</h{node.level}>\n")
            case Paragraph():
                sb.append("<p>")
                self._render_text(node, sb)
                sb.append("</p>\n")
            case CodeBlock():
                self._render_code_block(node, sb)
            case List():
                tag = "ol" if node.ordered else "ul"
                sb.append(f"<{tag}>\n")
                for item in node.items:
                    self._render_node(item, sb)
                sb.append(f"</{tag}>\n")
            case ListItem():
                sb.append("<li>").append(escape_html(node.text))
                for child in node.children:
                    self._render_node(child, sb)
                sb.append("</li>\n")
            case Blockquote(children=children):
                sb.append("<blockquote>\n")
                for child in children:
                    self._render_node(child, sb)
                sb.append("</blockquote>\n")
            case HorizontalRule():
                sb.append("<hr>\n")
            case InlineCode() | Bold() | Italic() | Link():
                self._render_inline(node, sb)

    def _render_code_block(self, code: CodeBlock, sb: StringBuilder) -> None:
        if code.language == MERMAID_LANGUAGE:
            logger.debug("emitting unescaped mermaid block (%d chars)", len(code.code))
            sb.append('<div class="mermaid">\n').append(code.code).append("\n</div>\n")
            return
        sb.append(f'<pre><code class="language-{escape_html(code.language)}">')
        sb.append(escape_html(code.code))
        sb.append("</code></pre>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_text(self, block: Heading | Paragraph, sb: StringBuilder) -> None:
        """Render block text with its inline children substituted in place.

        Children are placed by their source offsets. When those do not fit
        the text (unpositioned or rewritten nodes), the escaped text is
        followed by the rendered children instead.
        """
        text = block.text
        if not block.children:
            sb.append(escape_html(text))
            return

        spans = _inline_spans(block)
        if spans is None:
            sb.append(escape_html(text))
            for child in block.children:
                self._render_inline(child, sb)
            return

        cursor = 0
        for (start, end), child in zip(spans, block.children):
            sb.append(escape_html(text[cursor:start]))
            self._render_inline(child, sb)
            cursor = end
        sb.append(escape_html(text[cursor:]))

    def _render_inline(self, node: Inline, sb: StringBuilder) -> None:
        match node:
            case InlineCode(text=text):
                sb.append("<code>").append(escape_html(text)).append("</code>")
            case Bold(text=text):
                sb.append("<strong>").append(escape_html(text)).append("</strong>")
            case Italic(text=text):
                sb.append("<em>").append(escape_html(text)).append("</em>")
            case Link(text=text, url=url):
                sb.append(f'<a href="{escape_html(url)}">').append(escape_html(text)).append("</a>")


def render_html(node: Node) -> str:
    """Render ``node`` to HTML with a default HtmlRenderer."""
    return HtmlRenderer().render(node)


def _text_origin(block: Heading | Paragraph) -> int | None:
    """Source offset of the first character of ``block.text``.

    Block text always runs to the end of the block, minus the newline
    when the block ends on a later line.
    """
    start, end = block.start_pos, block.end_pos
    if start is None or end is None:
        return None
    newline = 1 if end.line > start.line else 0
    origin = end.offset - newline - len(block.text)
    return origin if origin >= start.offset else None


def _inline_spans(block: Heading | Paragraph) -> list[tuple[int, int]] | None:
    """Text slices covered by each inline child, or None if any does not fit."""
    origin = _text_origin(block)
    if origin is None:
        return None
    spans: list[tuple[int, int]] = []
    cursor = 0
    for child in block.children:
        if child.start_pos is None or child.end_pos is None:
            return None
        start = child.start_pos.offset - origin
        end = child.end_pos.offset - origin
        if not cursor <= start < end <= len(block.text):
            return None
        spans.append((start, end))
        cursor = end
    return spans
