"""Character sets for O(1) classification in the lexer.

All sets are frozensets for:
- O(1) membership testing
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)
"""

from marktree.tokens import STRUCTURAL_CHARS

# Only ASCII digits form NUMBER runs; other Unicode digits are plain text.
ASCII_DIGITS: frozenset[str] = frozenset("0123456789")

# Characters that end a TEXT run
TEXT_STOP: frozenset[str] = frozenset(STRUCTURAL_CHARS) | ASCII_DIGITS

FENCE = "```"
