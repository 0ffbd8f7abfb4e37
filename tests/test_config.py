"""Tests for ContextVar-based parse configuration.

Validates defaults, thread isolation and context manager behavior.
"""

from threading import Thread

import pytest

from marktree import (
    ParseConfig,
    Parser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from marktree.config import DEFAULT_MAX_DEPTH


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config is lenient with the inline pass off."""
        config = ParseConfig()
        assert config.inline_markup is False
        assert config.strict is False
        assert config.max_depth == DEFAULT_MAX_DEPTH == 1000

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"strict": True, "tables": True})
        assert config == ParseConfig(strict=True)

    def test_from_dict_empty(self) -> None:
        assert ParseConfig.from_dict({}) == ParseConfig()


class TestContextVar:
    """Getting, setting and scoping the active config."""

    def test_default_config_active(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_parse_config(ParseConfig(inline_markup=True))
            assert get_parse_config().inline_markup is True
            (para,) = parse("a `b`").children
            assert len(para.children) == 1
        finally:
            reset_parse_config()
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores(self) -> None:
        with parse_config_context(ParseConfig(strict=True)):
            assert get_parse_config().strict is True
        assert get_parse_config().strict is False

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), parse_config_context(ParseConfig(strict=True)):
            raise RuntimeError("boom")
        assert get_parse_config().strict is False

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(strict=True)):
            with parse_config_context(ParseConfig(inline_markup=True)):
                assert get_parse_config() == ParseConfig(inline_markup=True)
            assert get_parse_config() == ParseConfig(strict=True)

    def test_parser_reads_config_at_parse_time(self) -> None:
        parser = Parser("```")
        with parse_config_context(ParseConfig(strict=True)):
            result = parser.parse()
        assert len(result.diagnostics) == 1


class TestThreadIsolation:
    """Config set in one thread does not leak into another."""

    def test_thread_changes_do_not_leak(self) -> None:
        seen: list[ParseConfig] = []

        def worker() -> None:
            set_parse_config(ParseConfig(strict=True))
            seen.append(get_parse_config())

        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert seen == [ParseConfig(strict=True)]
        assert get_parse_config() == ParseConfig()

    def test_parallel_parses_use_own_config(self) -> None:
        results: dict[str, int] = {}

        def worker(name: str, config: ParseConfig) -> None:
            with parse_config_context(config):
                (para,) = parse("x `y` z").children
                results[name] = len(para.children)

        threads = [
            Thread(target=worker, args=("inline", ParseConfig(inline_markup=True))),
            Thread(target=worker, args=("plain", ParseConfig())),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {"inline": 1, "plain": 0}
