"""Semantic highlighting for marktree documents.

Highlighting is driven by the AST rather than by regexes over the source:
each positioned Heading, Paragraph, CodeBlock and inline node becomes a
HighlightRange whose kind doubles as the key into a ColorTheme.

Usage:
    from marktree import parse
    from marktree.highlighting import SemanticHighlighter, get_theme

    highlighter = SemanticHighlighter(get_theme("light"))
    for r in highlighter.highlight(parse(source)):
        color = highlighter.color_for(r.kind)

Two themes are built in ("dark" and "light"); ``ColorTheme.from_dict``
builds custom ones.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from marktree.errors import ThemeError
from marktree.nodes import (
    Bold,
    CodeBlock,
    Heading,
    InlineCode,
    Italic,
    Link,
    Node,
    Paragraph,
)
from marktree.visitor import BaseVisitor


class HighlightKind(StrEnum):
    """Token kinds for highlight ranges.

    Values are also the ColorTheme keys. LIST_MARKER is reserved: themes
    define a color for it but no range is produced with it yet.
    """

    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    HEADING5 = "heading5"
    HEADING6 = "heading6"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    LIST_MARKER = "list_marker"

    @classmethod
    def for_heading(cls, level: int) -> HighlightKind:
        """Kind for a heading of ``level``; anything past 5 maps to HEADING6."""
        return _HEADING_KINDS.get(level, cls.HEADING6)


_HEADING_KINDS: dict[int, HighlightKind] = {
    1: HighlightKind.HEADING1,
    2: HighlightKind.HEADING2,
    3: HighlightKind.HEADING3,
    4: HighlightKind.HEADING4,
    5: HighlightKind.HEADING5,
}


@dataclass(frozen=True, slots=True)
class HighlightRange:
    """A highlighted span; lines and columns are 0-indexed."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    kind: HighlightKind

    @classmethod
    def for_node(cls, node: Node, kind: HighlightKind) -> HighlightRange:
        """Range spanning ``node``.

        Raises:
            ValueError: If ``node`` has no start or end position.

        """
        start, end = node.start_pos, node.end_pos
        if start is None or end is None:
            msg = f"cannot highlight unpositioned {node.kind} node"
            raise ValueError(msg)
        return cls(start.line, start.column, end.line, end.column, kind)


# Theme keys: every HighlightKind value plus the code block background
THEME_KEYS: frozenset[str] = frozenset({*HighlightKind, "code_block_bg"})


@dataclass(frozen=True, slots=True)
class ColorTheme:
    """A named mapping from theme keys to color strings."""

    name: str
    colors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def get_color(self, key: str) -> str | None:
        """Color for ``key``, or None when the theme does not define it."""
        return self.colors.get(key)

    @classmethod
    def from_dict(cls, name: str, colors: Mapping[str, str]) -> ColorTheme:
        """Build a theme from a mapping; keys outside THEME_KEYS are dropped."""
        return cls(name, {k: v for k, v in colors.items() if k in THEME_KEYS})

    @classmethod
    def dark(cls) -> ColorTheme:
        return cls(
            "dark",
            {
                "heading1": "#569CD6",
                "heading2": "#4EC9B0",
                "heading3": "#DCDCAA",
                "heading4": "#9CDCFE",
                "heading5": "#C586C0",
                "heading6": "#CE9178",
                "paragraph": "#D4D4D4",
                "code_block": "#CE9178",
                "code_block_bg": "#1E1E1E",
                "inline_code": "#CE9178",
                "list_marker": "#4EC9B0",
                "bold": "#569CD6",
                "italic": "#C586C0",
                "link": "#4EC9B0",
            },
        )

    @classmethod
    def light(cls) -> ColorTheme:
        return cls(
            "light",
            {
                "heading1": "#0000FF",
                "heading2": "#008080",
                "heading3": "#808000",
                "heading4": "#000080",
                "heading5": "#800080",
                "heading6": "#FF8C00",
                "paragraph": "#000000",
                "code_block": "#A31515",
                "code_block_bg": "#F5F5F5",
                "inline_code": "#A31515",
                "list_marker": "#008080",
                "bold": "#0000FF",
                "italic": "#800080",
                "link": "#0000EE",
            },
        )


_BUILTIN_THEMES = {
    "dark": ColorTheme.dark,
    "light": ColorTheme.light,
}


def get_theme(name: str) -> ColorTheme:
    """Return a built-in theme by name.

    Raises:
        ThemeError: If ``name`` is not a built-in theme.

    """
    factory = _BUILTIN_THEMES.get(name)
    if factory is None:
        raise ThemeError(name)
    return factory()


class SemanticHighlighter(BaseVisitor[None]):
    """Collects highlight ranges from a document in pre-order.

    Only fully positioned nodes produce ranges. A highlighter instance
    accumulates ranges while visiting, so use one per thread.
    """

    def __init__(self, theme: ColorTheme | None = None) -> None:
        self.theme = theme if theme is not None else ColorTheme.dark()
        self._ranges: list[HighlightRange] = []

    def highlight(self, root: Node) -> list[HighlightRange]:
        """Return the highlight ranges for ``root`` and its descendants."""
        self._ranges = []
        self.visit(root)
        return self._ranges

    def color_for(self, kind: HighlightKind) -> str | None:
        return self.theme.get_color(kind.value)

    def _add(self, node: Node, kind: HighlightKind) -> None:
        if node.is_positioned:
            self._ranges.append(HighlightRange.for_node(node, kind))

    def visit_heading(self, node: Heading) -> None:
        self._add(node, HighlightKind.for_heading(node.level))

    def visit_paragraph(self, node: Paragraph) -> None:
        self._add(node, HighlightKind.PARAGRAPH)

    def visit_code_block(self, node: CodeBlock) -> None:
        self._add(node, HighlightKind.CODE_BLOCK)

    def visit_inline_code(self, node: InlineCode) -> None:
        self._add(node, HighlightKind.INLINE_CODE)

    def visit_bold(self, node: Bold) -> None:
        self._add(node, HighlightKind.BOLD)

    def visit_italic(self, node: Italic) -> None:
        self._add(node, HighlightKind.ITALIC)

    def visit_link(self, node: Link) -> None:
        self._add(node, HighlightKind.LINK)


def highlight(root: Node, theme: str | ColorTheme = "dark") -> list[HighlightRange]:
    """Highlight ranges for ``root`` using a theme name or ColorTheme.

    Raises:
        ThemeError: If ``theme`` names no built-in theme.

    """
    if isinstance(theme, str):
        theme = get_theme(theme)
    return SemanticHighlighter(theme).highlight(root)
