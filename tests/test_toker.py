# =============================================================================
# test_toker.py - Tokenizer Unit Tests
# =============================================================================
# Tests for the Toker: the externally visible token stream.
#
# Test coverage includes:
#   - Whitespace filtering and the end-of-stream sentinel
#   - Atomic special pairs and singles, registry changes between calls
#   - Comments and quoted literals as tokens
#   - Lossless reconstruction through raw_tokens()
#   - Line counting, file sources, strict mode
# =============================================================================

import pytest

from lexscan.config import ScannerOptions
from lexscan.errors import UnterminatedTokenError
from lexscan.states import DEFAULT_SPECIAL_CHAR_PAIRS, SpecialCharRegistry
from lexscan.toker import Toker


def tokenize(text: str, **kwargs) -> list:
    toker = Toker(ScannerOptions(**kwargs))
    toker.open_string(text)
    return list(toker.tokens())


# =============================================================================
# Basic Token Stream
# =============================================================================

class TestBasicTokens:
    """Test the filtered token stream."""

    def test_empty_source(self):
        toker = Toker()
        toker.open_string("")
        assert toker.is_done()
        assert toker.get_tok() is None

    def test_whitespace_only(self):
        assert tokenize("  \t\n  \n") == []

    def test_end_sentinel_repeats(self):
        toker = Toker()
        toker.open_string("x")
        assert toker.get_tok() == "x"
        assert toker.get_tok() is None
        assert toker.get_tok() is None
        assert toker.is_done()

    def test_no_whitespace_tokens(self):
        tokens = tokenize("  int   x =\n\t 1 ;  \n")
        assert tokens == ["int", "x", "=", "1", ";"]

    def test_identifiers_and_numbers(self):
        assert tokenize("foo bar_baz _q 42 x1") == ["foo", "bar_baz", "_q", "42", "x1"]

    def test_verbatim_identifier(self):
        assert tokenize("var @class = 1;") == ["var", "@class", "=", "1", ";"]

    def test_punctuation_is_single_characters(self):
        assert tokenize("a,b;c.d") == ["a", ",", "b", ";", "c", ".", "d"]
        assert tokenize("!!") == ["!", "!"]

    def test_statement(self):
        assert tokenize("if (a == b) { c += 1; }") == [
            "if", "(", "a", "==", "b", ")", "{", "c", "+=", "1", ";", "}",
        ]

    def test_last_character_not_dropped(self):
        assert tokenize("x;") == ["x", ";"]
        assert tokenize("}") == ["}"]


# =============================================================================
# Special Characters
# =============================================================================

class TestSpecialCharacters:
    """Test atomic special pairs and singles."""

    @pytest.mark.parametrize("pair", DEFAULT_SPECIAL_CHAR_PAIRS)
    def test_default_pairs_are_atomic(self, pair):
        assert tokenize(f"a {pair} b") == ["a", pair, "b"]
        assert tokenize(f"a{pair}b") == ["a", pair, "b"]

    def test_pair_not_merged_with_third_char(self):
        assert tokenize("a<<=b") == ["a", "<<", "=", "b"]
        assert tokenize("x+++y") == ["x", "++", "+", "y"]

    def test_scope_operator(self):
        assert tokenize("std::cout") == ["std", "::", "cout"]

    def test_special_singles_adjacent(self):
        assert tokenize("f()[0]") == ["f", "(", ")", "[", "0", "]"]

    def test_add_special_single(self):
        toker = Toker()
        toker.open_string("a |= b")
        assert toker.set_special_single_chars("|")
        assert list(toker.tokens()) == ["a", "|", "=", "b"]

    def test_add_special_pair(self):
        toker = Toker()
        toker.open_string("p->q")
        assert toker.set_special_char_pairs("->")
        assert list(toker.tokens()) == ["p", "->", "q"]

    def test_registry_change_applies_to_next_token(self):
        """A pair added between calls is used for the very next token."""
        toker = Toker()
        toker.open_string("a->b->c")
        assert toker.get_tok() == "a"
        assert toker.get_tok() == "-"
        assert toker.get_tok() == ">"
        assert toker.get_tok() == "b"
        toker.set_special_char_pairs("->")
        assert toker.get_tok() == "->"
        assert toker.get_tok() == "c"

    def test_options_extend_registry(self):
        assert tokenize("a!=b", extra_char_pairs=["!="]) == ["a", "!=", "b"]

    def test_shared_registry(self):
        registry = SpecialCharRegistry()
        toker = Toker(registry=registry)
        registry.add_pair("->")
        toker.open_string("p->q")
        assert list(toker.tokens()) == ["p", "->", "q"]

    def test_print_special_chars(self, capsys):
        toker = Toker()
        assert toker.print_special_single_chars()
        assert toker.print_special_char_pairs()
        out = capsys.readouterr().out
        assert "'<'" in out
        assert '"::"' in out


# =============================================================================
# Comments and Quoted Literals
# =============================================================================

class TestCommentsAndQuotes:
    """Test comments and literals returned as whole tokens."""

    def test_line_comment(self):
        assert tokenize("x; // note\ny;") == ["x", ";", "// note\n", "y", ";"]

    def test_block_comment(self):
        assert tokenize("x /* a;\nb */ y") == ["x", "/* a;\nb */", "y"]

    def test_division_is_not_comment(self):
        assert tokenize("a / b") == ["a", "/", "b"]

    def test_double_quoted(self):
        assert tokenize('s = "a b; c";') == ["s", "=", '"a b; c"', ";"]

    def test_single_quoted(self):
        assert tokenize("c = ';';") == ["c", "=", "';'", ";"]

    def test_escaped_quote(self):
        assert tokenize('"a\\"b" x') == ['"a\\"b"', "x"]

    def test_escaped_backslash(self):
        assert tokenize('"a\\\\" x') == ['"a\\\\"', "x"]

    def test_comment_inside_quotes(self):
        assert tokenize('"// not a comment" x') == ['"// not a comment"', "x"]

    def test_quote_inside_comment(self):
        assert tokenize("// it's\nx") == ["// it's\n", "x"]

    def test_unterminated_literal_permissive(self):
        assert tokenize('x = "open') == ["x", "=", '"open']

    def test_unterminated_comment_strict(self):
        toker = Toker(ScannerOptions(strict=True))
        toker.open_string("x;\n/* open")
        assert toker.get_tok() == "x"
        assert toker.get_tok() == ";"
        with pytest.raises(UnterminatedTokenError) as exc_info:
            toker.get_tok()
        assert exc_info.value.location.line == 2


# =============================================================================
# Reconstruction
# =============================================================================

class TestReconstruction:
    """Joining every raw token reproduces the source exactly."""

    @pytest.mark.parametrize("text", [
        "",
        "int main() { return 0; }\n",
        "  a<<=b ; c->d // end",
        'printf("%d\\n", x); /* multi\nline */ y++;',
        "using System;\n#include <stdio.h>\r\n",
        "x = '\\'';",
        'unterminated "literal',
        "@verbatim _id 123abc $ ` ~ ? ! ^ %",
        "é = ü + 1; // ünïcödé",
    ])
    def test_raw_tokens_reconstruct_source(self, text):
        toker = Toker()
        toker.open_string(text)
        assert "".join(toker.raw_tokens()) == text

    def test_raw_tokens_include_whitespace(self):
        toker = Toker()
        toker.open_string("a  b")
        assert list(toker.raw_tokens()) == ["a", "  ", "b"]


# =============================================================================
# Line Counting and Sources
# =============================================================================

class TestLineCountAndSources:
    """Test line tracking and attaching to files."""

    def test_line_count(self):
        toker = Toker()
        toker.open_string("a\nb\n\nc")
        seen = []
        while (tok := toker.get_tok()) is not None:
            seen.append((tok, toker.line_count()))
        assert seen == [("a", 1), ("b", 2), ("c", 4)]

    def test_line_comment_advances_line(self):
        toker = Toker()
        toker.open_string("// c\nx")
        assert toker.get_tok() == "// c\n"
        assert toker.line_count() == 2

    def test_open_file(self, tmp_path):
        path = tmp_path / "prog.cs"
        path.write_text("class A { }\n", encoding="utf-8")
        with Toker() as toker:
            assert toker.open(path)
            assert list(toker.tokens()) == ["class", "A", "{", "}"]
            assert toker.name == str(path)

    def test_open_missing_file(self, tmp_path):
        toker = Toker()
        assert not toker.open(tmp_path / "missing.cs")
        assert toker.is_done()
        assert toker.get_tok() is None

    def test_close(self):
        toker = Toker()
        toker.open_string("a b")
        toker.close()
        assert toker.is_done()
        assert toker.get_tok() is None
