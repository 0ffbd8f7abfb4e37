"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from marktree.lexer import Lexer
from marktree.location import Position
from marktree.tokens import TokenType

MARKDOWN_ALPHABET = "#`*_-+[]().:>= \n\tab19é"


class TestBasicInvariants:
    """Test basic invariants that should always hold."""

    @given(st.text(max_size=1000))
    @settings(max_examples=200)
    def test_always_ends_with_eof(self, source: str) -> None:
        """Every tokenization must end with exactly one EOF token."""
        tokens = list(Lexer(source).tokenize())

        assert len(tokens) >= 1, "Must have at least EOF token"
        assert tokens[-1].type == TokenType.EOF, "Last token must be EOF"
        eof_count = sum(1 for t in tokens if t.type == TokenType.EOF)
        assert eof_count == 1, "Must have exactly one EOF token"

    @given(st.text(max_size=500))
    @settings(max_examples=100)
    def test_values_reassemble_source(self, source: str) -> None:
        """Concatenated token values reproduce the input exactly."""
        tokens = list(Lexer(source).tokenize())
        assert "".join(t.value for t in tokens) == source

    @given(st.text(max_size=500))
    @settings(max_examples=100)
    def test_only_eof_is_empty(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        for token in tokens[:-1]:
            assert token.value, f"empty value for {token!r}"

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=300))
    @settings(max_examples=150)
    def test_same_input_same_tokens(self, source: str) -> None:
        """Tokenization is deterministic."""
        assert list(Lexer(source).tokenize()) == list(Lexer(source).tokenize())


class TestPositionInvariants:
    """Positions agree with a character-by-character recount."""

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=300))
    @settings(max_examples=150)
    def test_positions_match_recount(self, source: str) -> None:
        pos = Position.zero()
        for token in Lexer(source).tokenize():
            assert token.position == pos
            for char in token.value:
                pos = pos.advance(char)

    @given(st.text(max_size=500))
    @settings(max_examples=100)
    def test_offsets_strictly_increase(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        offsets = [t.position.offset for t in tokens]
        assert offsets == sorted(set(offsets))
        assert tokens[-1].position.offset == len(source)

    @given(st.text(max_size=500))
    @settings(max_examples=100)
    def test_position_never_negative(self, source: str) -> None:
        for token in Lexer(source).tokenize():
            assert token.position.line >= 0
            assert token.position.column >= 0
            assert token.position.offset >= 0


class TestSpecialCharacterHandling:
    """Test handling of special markdown characters."""

    @given(st.text(alphabet="```\n", max_size=100))
    @settings(max_examples=50)
    def test_backtick_combinations(self, source: str) -> None:
        """Backtick runs split into fences first, then single backticks."""
        tokens = list(Lexer(source).tokenize())
        for token in tokens[:-1]:
            assert token.type in {
                TokenType.TRIPLE_BACKTICK,
                TokenType.BACKTICK,
                TokenType.NEWLINE,
            }

    @given(st.text(alphabet="0123456789", min_size=1, max_size=50))
    def test_digit_strings_are_one_number(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
