"""Utility modules for marktree.

Provides:
- text: escape_html, preview for text processing
- logger: get_logger for logging
- stringbuilder: StringBuilder for renderer output
"""

from marktree.utils.logger import get_logger
from marktree.utils.stringbuilder import StringBuilder
from marktree.utils.text import escape_html, preview

__all__ = [
    "StringBuilder",
    "escape_html",
    "get_logger",
    "preview",
]
