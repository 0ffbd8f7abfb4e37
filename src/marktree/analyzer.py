"""Document structure analysis.

Derives editor-facing structure from a parsed Document:
- outline: flat table of contents, one entry per heading
- foldable_regions: line spans an editor can collapse
- heading_hierarchy: direct sub-heading indices per heading
- statistics: block counts and the deepest heading level

Each artifact is computed on first access and memoized on the analyzer.
The Document itself is immutable, so cached results never go stale.

Example:
    >>> analyzer = DocumentAnalyzer(parse("# A\\n## B\\n"))
    >>> [item.text for item in analyzer.outline]
    ['A', 'B']
    >>> analyzer.heading_hierarchy
    {0: [1], 1: []}

"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum

from marktree.config import get_parse_config
from marktree.nodes import CodeBlock, Document, Heading, List, Paragraph
from marktree.utils.logger import get_logger
from marktree.walker import walk

logger = get_logger(__name__)

# Heading fold span used when no later heading closes the section
HEADING_FOLD_FALLBACK = 100


@dataclass(frozen=True, slots=True)
class OutlineItem:
    """One heading in the outline. ``line`` is 0 for unpositioned headings."""

    level: int
    text: str
    line: int


class FoldKind(StrEnum):
    HEADING = "heading"
    CODE_BLOCK = "code_block"
    LIST = "list"


@dataclass(frozen=True, slots=True)
class FoldRegion:
    """A collapsible span of lines.

    Attributes:
        start_line: First line of the region (0-indexed)
        end_line: Last line of the region
        kind: What produced the region
        level: Heading level for heading regions, 0 otherwise

    """

    start_line: int
    end_line: int
    kind: FoldKind
    level: int = 0


@dataclass(frozen=True, slots=True)
class Statistics:
    """Block counts for a document.

    ``max_heading_level`` is 0 when the document has no headings.
    """

    headings: int = 0
    paragraphs: int = 0
    code_blocks: int = 0
    lists: int = 0
    max_heading_level: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Analysis:
    """All four analysis artifacts together."""

    outline: list[OutlineItem]
    foldable_regions: list[FoldRegion]
    heading_hierarchy: dict[int, list[int]]
    statistics: Statistics


class DocumentAnalyzer:
    """Lazily computed, memoized structure of one Document.

    Thread Safety:
        Not thread-safe while caches are filling. Share the Document,
        not the analyzer; build one analyzer per thread.

    """

    __slots__ = (
        "document",
        "_headings_cache",
        "_outline_cache",
        "_regions_cache",
        "_hierarchy_cache",
        "_stats_cache",
    )

    def __init__(self, document: Document) -> None:
        self.document = document
        self._headings_cache: list[Heading] | None = None
        self._outline_cache: list[OutlineItem] | None = None
        self._regions_cache: list[FoldRegion] | None = None
        self._hierarchy_cache: dict[int, list[int]] | None = None
        self._stats_cache: Statistics | None = None

    @property
    def _headings(self) -> list[Heading]:
        if self._headings_cache is None:
            max_depth = get_parse_config().max_depth
            self._headings_cache = [
                n for n in walk(self.document, max_depth=max_depth) if isinstance(n, Heading)
            ]
        return self._headings_cache

    @property
    def outline(self) -> list[OutlineItem]:
        """Flat outline in document order (cached)."""
        if self._outline_cache is None:
            self._outline_cache = [
                OutlineItem(
                    h.level,
                    h.text,
                    h.start_pos.line if h.start_pos is not None else 0,
                )
                for h in self._headings
            ]
            logger.debug("outline: %d entries", len(self._outline_cache))
        return self._outline_cache

    @property
    def foldable_regions(self) -> list[FoldRegion]:
        """Heading, code block and multi-item list regions by start line (cached).

        A heading's region ends one line before the next heading of the
        same or a higher level, or ``HEADING_FOLD_FALLBACK`` lines after
        it when no such heading follows; regions that would not span more
        than one line are dropped. Overlapping regions are all kept.
        """
        if self._regions_cache is None:
            self._regions_cache = self._compute_regions()
            logger.debug("foldable regions: %d", len(self._regions_cache))
        return self._regions_cache

    def _compute_regions(self) -> list[FoldRegion]:
        regions: list[FoldRegion] = []
        headings = self._headings

        for i, heading in enumerate(headings):
            if heading.start_pos is None:
                continue
            start_line = heading.start_pos.line
            end_line = start_line + HEADING_FOLD_FALLBACK
            for later in headings[i + 1 :]:
                if later.start_pos is not None and later.level <= heading.level:
                    end_line = later.start_pos.line - 1
                    break
            if end_line > start_line:
                regions.append(FoldRegion(start_line, end_line, FoldKind.HEADING, heading.level))

        max_depth = get_parse_config().max_depth
        for node in walk(self.document, max_depth=max_depth):
            if node.start_pos is None or node.end_pos is None:
                continue
            match node:
                case CodeBlock():
                    regions.append(
                        FoldRegion(node.start_pos.line, node.end_pos.line, FoldKind.CODE_BLOCK)
                    )
                case List(items=items) if len(items) > 1:
                    regions.append(
                        FoldRegion(node.start_pos.line, node.end_pos.line, FoldKind.LIST)
                    )

        regions.sort(key=lambda r: r.start_line)
        return regions

    @property
    def heading_hierarchy(self) -> dict[int, list[int]]:
        """Map each heading index to the indices of its direct sub-headings.

        A sub-heading is a later heading exactly one level deeper; the scan
        for heading ``i`` stops at the first later heading whose level is
        at or above ``i``'s.
        """
        if self._hierarchy_cache is not None:
            return self._hierarchy_cache
        headings = self._headings
        hierarchy: dict[int, list[int]] = {}
        for i, heading in enumerate(headings):
            children: list[int] = []
            for j in range(i + 1, len(headings)):
                level = headings[j].level
                if level == heading.level + 1:
                    children.append(j)
                elif level <= heading.level:
                    break
            hierarchy[i] = children
        self._hierarchy_cache = hierarchy
        return hierarchy

    @property
    def statistics(self) -> Statistics:
        """Block counts, gathered in a single walk (cached)."""
        if self._stats_cache is not None:
            return self._stats_cache
        headings = paragraphs = code_blocks = lists = max_level = 0
        max_depth = get_parse_config().max_depth
        for node in walk(self.document, max_depth=max_depth):
            match node:
                case Heading(level=level):
                    headings += 1
                    max_level = max(max_level, level)
                case Paragraph():
                    paragraphs += 1
                case CodeBlock():
                    code_blocks += 1
                case List():
                    lists += 1
        self._stats_cache = Statistics(headings, paragraphs, code_blocks, lists, max_level)
        logger.debug("statistics: %s", self._stats_cache)
        return self._stats_cache

    def analyze(self) -> Analysis:
        """Compute (or reuse) every artifact and bundle them."""
        return Analysis(
            outline=self.outline,
            foldable_regions=self.foldable_regions,
            heading_hierarchy=self.heading_hierarchy,
            statistics=self.statistics,
        )


def analyze(document: Document) -> Analysis:
    """Analyze ``document`` in one call."""
    return DocumentAnalyzer(document).analyze()
