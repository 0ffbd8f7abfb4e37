"""ContextVar-based parse configuration for marktree.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The parser and its sub-passes read the active config instead of carrying
their own copies.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from marktree.config import ParseConfig, parse_config_context
    from marktree.parser import Parser

    with parse_config_context(ParseConfig(strict=True)):
        result = Parser(source).parse()
        for diagnostic in result.diagnostics:
            print(diagnostic)

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

DEFAULT_MAX_DEPTH = 1000


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        inline_markup: Run the inline pass over heading and paragraph text,
            filling their ``children`` with InlineCode/Bold/Italic/Link nodes
        strict: Record a Diagnostic for every construct the parser degrades
        max_depth: Depth cap for tree traversal (visitor, analyzer)

    """

    inline_markup: bool = False
    strict: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({"strict": True, "unknown": 1})
            >>> config.strict
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "marktree_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(inline_markup=True)):
        ...     doc = parse("Some `code` here")
        >>> # Previous config is active again here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
