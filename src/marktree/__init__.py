"""
marktree: position-annotated Markdown trees for editors and tooling

Turns markdown text into an immutable, fully positioned AST and offers
the structure editors need on top of it: outline, fold regions, heading
hierarchy, semantic highlight ranges, and HTML preview.

Quick Start:
    >>> from marktree import parse, render_html
    >>> doc = parse("# Hello, World!")
    >>> render_html(doc)
    '<h1>Hello, World!</h1>\\n'

    >>> from marktree import analyze
    >>> analyze(doc).statistics.headings
    1

Strict parsing:
    >>> result = parse_with_diagnostics("```py\\nx", config=ParseConfig(strict=True))
    >>> [d.code for d in result.diagnostics]
    ['unterminated-fence']

Installation:
    pip install marktree             # zero runtime dependencies
"""

from marktree.analyzer import (
    Analysis,
    DocumentAnalyzer,
    FoldKind,
    FoldRegion,
    OutlineItem,
    Statistics,
)
from marktree.analyzer import analyze as _analyze
from marktree.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from marktree.errors import (
    Diagnostic,
    InvalidInputError,
    MarktreeError,
    SerializationError,
    ThemeError,
    UnsupportedOperationError,
)
from marktree.highlighting import (
    ColorTheme,
    HighlightKind,
    HighlightRange,
    SemanticHighlighter,
    get_theme,
)
from marktree.highlighting import highlight as _highlight
from marktree.lexer import Lexer, tokenize
from marktree.location import Position
from marktree.nodes import (
    AnyNode,
    Block,
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
    NodeKind,
    Paragraph,
    add_child,
    children_of,
    owns_children,
)
from marktree.parser import ParseResult, Parser
from marktree.renderers.html import HtmlRenderer
from marktree.renderers.html import render_html as _render_html
from marktree.serialization import from_dict, from_json, to_dict, to_json
from marktree.tokens import Token, TokenType
from marktree.utils.logger import get_logger
from marktree.visitor import BaseVisitor, transform
from marktree.walker import (
    Order,
    Walker,
    count_by_kind,
    count_nodes,
    filter_nodes,
    find_all,
    find_at,
    find_by_position,
    find_code_blocks,
    find_headings,
    find_lists,
    find_paragraphs,
    walk,
)

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(source: str) -> Document:
    """Parse Markdown source into a typed, positioned AST.

    Uses the active ParseConfig (see ``parse_config_context``).

    Args:
        source: Markdown source text

    Returns:
        Document AST root node

    Raises:
        InvalidInputError: If ``source`` is not a ``str``.

    Example:
        >>> doc = parse("# Hello\\n\\n- a\\n- b\\n")
        >>> [child.kind.value for child in doc.children]
        ['heading', 'list']
    """
    return Parser(source).parse().document


def parse_with_diagnostics(source: str, *, config: ParseConfig | None = None) -> ParseResult:
    """Parse and also return the diagnostics gathered along the way.

    Args:
        source: Markdown source text
        config: Configuration for this call only; the active one otherwise

    Returns:
        ParseResult; ``diagnostics`` is empty unless ``config.strict``
    """
    if config is None:
        return Parser(source).parse()
    with parse_config_context(config):
        return Parser(source).parse()


def load(data: str | bytes, *, config: ParseConfig | None = None) -> ParseResult | None:
    """Parse text handed over from outside Python code.

    Bytes are decoded as UTF-8. Input that is not text at all, including
    undecodable bytes, yields None rather than a partial tree.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.debug("load: input is not UTF-8 (%s)", exc.reason)
            return None
    try:
        return parse_with_diagnostics(data, config=config)
    except InvalidInputError as exc:
        logger.debug("load: %s", exc)
        return None


def analyze(document: Document) -> Analysis:
    """Outline, foldable regions, heading hierarchy and statistics."""
    return _analyze(document)


def highlight(document: Node, theme: str | ColorTheme = "dark") -> list[HighlightRange]:
    """Semantic highlight ranges for ``document`` in pre-order.

    Raises:
        ThemeError: If ``theme`` names no built-in theme.
    """
    return _highlight(document, theme)


def render_html(document: Node) -> str:
    """Render ``document`` to HTML."""
    return _render_html(document)


__all__ = [
    # High-level API
    "parse",
    "parse_with_diagnostics",
    "load",
    "analyze",
    "highlight",
    "render_html",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Core classes
    "Parser",
    "ParseResult",
    "Lexer",
    "tokenize",
    "Token",
    "TokenType",
    "Position",
    # Nodes
    "Node",
    "NodeKind",
    "AnyNode",
    "Block",
    "Inline",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "List",
    "ListItem",
    "Blockquote",
    "HorizontalRule",
    "InlineCode",
    "Bold",
    "Italic",
    "Link",
    "owns_children",
    "children_of",
    "add_child",
    # Traversal
    "Order",
    "Walker",
    "walk",
    "find_all",
    "find_headings",
    "find_code_blocks",
    "find_paragraphs",
    "find_lists",
    "filter_nodes",
    "find_by_position",
    "find_at",
    "count_nodes",
    "count_by_kind",
    "BaseVisitor",
    "transform",
    # Analysis
    "DocumentAnalyzer",
    "Analysis",
    "OutlineItem",
    "FoldKind",
    "FoldRegion",
    "Statistics",
    # Highlighting
    "SemanticHighlighter",
    "HighlightKind",
    "HighlightRange",
    "ColorTheme",
    "get_theme",
    # Rendering
    "HtmlRenderer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Errors
    "MarktreeError",
    "UnsupportedOperationError",
    "InvalidInputError",
    "ThemeError",
    "SerializationError",
    "Diagnostic",
    # Version
    "__version__",
]
