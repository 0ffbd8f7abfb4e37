"""Character lexer for the marktree parser.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, tokenize
├── core.py              # Lexer class
└── charsets.py          # Character classification sets

Usage:
    >>> from marktree.lexer import tokenize
    >>> [t.type.name for t in tokenize("1. a")]
    ['NUMBER', 'DOT', 'SPACE', 'TEXT', 'EOF']

"""

from marktree.lexer.core import Lexer, tokenize

__all__ = ["Lexer", "tokenize"]
