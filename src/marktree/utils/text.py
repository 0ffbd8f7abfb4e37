"""Text processing utilities for marktree.

Example:
    >>> from marktree.utils.text import escape_html
    >>> escape_html("<b>")
    '&lt;b&gt;'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#39;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text, safe in element content and quoted attributes

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        '&lt;script&gt;alert(&#39;xss&#39;)&lt;/script&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("&#x27;", "&#39;")


def preview(text: str, limit: int = 30) -> str:
    """Truncate ``text`` to ``limit`` characters for reprs and log lines.

    Examples:
        >>> preview("abcdefghij", limit=8)
        'abcde...'
    """
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
