"""
Semi-Expression Aggregator
==========================

A semi-expression is the sequence of tokens that makes up one statement
or scope boundary: just enough to hand to a code analyzer. Units end
with a token whose last character is ';', '{' or '}'.

Folding Rules
-------------
- for(...) headers are kept whole. After a "for" token the aggregator
  collects tokens until the '(' and ')' counts balance, then takes one
  more token, so the ';' characters inside the header never end a unit.
- Lines starting with "using" or "#" get a "\\n" marker token in front,
  so directive lines can be told apart downstream.

A trailing run of tokens with no terminator is not returned: get_semi()
reports False and the partial tokens are discarded.

Example Usage
-------------
>>> from lexscan.semi import SemiExpression
>>> semi = SemiExpression()
>>> semi.open_string("using System;\\nfor(int i=0;i<5;++i){ x = i; }")
True
>>> while semi.get_semi():
...     print(semi.tokens)
['\\n', 'using', 'System', ';']
['for', '(', 'int', 'i', '=', '0', ';', 'i', '<', '5', ';', '++', 'i', ')', '{']
['x', '=', 'i', ';']
['}']
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Union
import logging
import sys

from lexscan.config import ScannerOptions
from lexscan.errors import ScanError, SourceLocation, UnbalancedHeaderError
from lexscan.states import SpecialCharRegistry
from lexscan.toker import Toker


logger = logging.getLogger(__name__)

NEWLINE_MARKER = "\n"

TERMINATORS = (";", "{", "}")

# Tokens that open a directive line
DIRECTIVE_STARTS = ("using", "#")


class SemiExpression:
    """
    Collects semi-expressions from a token stream.

    The instance is both the aggregator and the current unit: get_semi()
    clears and refills it, and the list-style accessors operate on the
    unit most recently collected.

    Attributes:
        options: Scanner configuration shared with the internal Toker
        return_newlines: Insert the "\\n" marker before "using" and "#"
        discard_comments: Drop comment tokens while collecting
        verbose: Log each collected unit at DEBUG level
    """

    def __init__(
        self,
        options: Optional[ScannerOptions] = None,
        registry: Optional[SpecialCharRegistry] = None,
    ):
        self.options = options or ScannerOptions()
        self.return_newlines = self.options.return_newlines
        self.discard_comments = self.options.discard_comments
        self.verbose = self.options.verbose

        self._toker = Toker(self.options, registry)
        self._tokens: List[str] = []

    # =========================================================================
    # Source Management
    # =========================================================================

    def open(self, path: Union[str, Path]) -> bool:
        """
        Attach the aggregator to a file.

        Returns:
            True on success, False if the file cannot be opened
        """
        return self._toker.open(path)

    def open_string(self, text: str, name: str = "<string>") -> bool:
        """Attach the aggregator to an in-memory string."""
        return self._toker.open_string(text, name)

    def close(self) -> None:
        self._toker.close()

    def __enter__(self) -> "SemiExpression":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def toker(self) -> Toker:
        return self._toker

    def line_count(self) -> int:
        return self._toker.line_count()

    # =========================================================================
    # Collection
    # =========================================================================

    def _next_token(self) -> Optional[str]:
        while (tok := self._toker.get_tok()) is not None:
            if self.discard_comments and self.is_comment(tok):
                continue
            return tok
        return None

    def _fold_for_header(self) -> bool:
        """
        Append a for(...) header and the token that follows it.

        Returns:
            False if the source ran out first
        """
        start_line = self.line_count()
        opens = 0
        closes = 0
        while True:
            tok = self._next_token()
            if tok is None:
                return self._unbalanced(opens, closes, start_line)
            self._tokens.append(tok)
            if tok == "(":
                opens += 1
            elif tok == ")":
                closes += 1
            if opens == closes:
                break

        tok = self._next_token()
        if tok is None:
            return self._unbalanced(opens, closes, start_line)
        self._tokens.append(tok)
        return True

    def _unbalanced(self, opens: int, closes: int, start_line: int) -> bool:
        location = SourceLocation(self._toker.name, start_line)
        if self.options.strict and opens != closes:
            raise UnbalancedHeaderError(opens, closes, location)
        logger.warning(f"{location}: 'for' header runs to end of file")
        return False

    def get_semi(self) -> bool:
        """
        Collect the next semi-expression.

        Returns:
            True if a terminated unit was collected, False once the source
            is exhausted. Any unterminated trailing tokens are discarded.

        Raises:
            UnterminatedTokenError: In strict mode (from the tokenizer)
            UnbalancedHeaderError: In strict mode, for an unbalanced
                for(...) header at end of file

        The unit is left empty whenever no terminated unit is collected,
        including when one of the errors above is raised.
        """
        self._tokens.clear()
        try:
            collected = self._collect()
        except ScanError:
            self._tokens.clear()
            raise
        if not collected:
            self._tokens.clear()
        return collected

    def _collect(self) -> bool:
        while True:
            tok = self._next_token()
            if tok is None:
                if self._tokens:
                    logger.debug(
                        f"Discarding {len(self._tokens)} unterminated tokens "
                        f"at end of {self._toker.name}"
                    )
                return False

            if tok in DIRECTIVE_STARTS and self.return_newlines:
                self._tokens.append(NEWLINE_MARKER)
            self._tokens.append(tok)

            while self._tokens[-1] == "for":
                if not self._fold_for_header():
                    return False

            if self._tokens[-1][-1] in TERMINATORS:
                if self.verbose:
                    logger.debug(f"line {self.line_count()}: {self.display_str()}")
                return True

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def semis(self) -> Iterator["SemiExpression"]:
        """Yield a copy of every remaining semi-expression."""
        while self.get_semi():
            yield self.clone()

    # =========================================================================
    # Token Access
    # =========================================================================

    @property
    def count(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> str:
        return self._tokens[index]

    def __setitem__(self, index: int, tok: str) -> None:
        self._tokens[index] = tok

    @property
    def tokens(self) -> List[str]:
        """Copy of the current unit's tokens."""
        return list(self._tokens)

    def find_first(self, tok: str) -> int:
        """Index of the first occurrence of tok, -1 if absent."""
        for i, t in enumerate(self._tokens):
            if t == tok:
                return i
        return -1

    def find_last(self, tok: str) -> int:
        """Index of the last occurrence of tok, -1 if absent."""
        for i in range(len(self._tokens) - 1, -1, -1):
            if self._tokens[i] == tok:
                return i
        return -1

    def contains(self, tok: str) -> int:
        return self.find_last(tok)

    # =========================================================================
    # Editing
    # =========================================================================

    def insert(self, pos: int, tok: str) -> bool:
        """
        Insert tok before position pos.

        Returns:
            False if pos is outside 0 <= pos < count
        """
        if 0 <= pos < len(self._tokens):
            self._tokens.insert(pos, tok)
            return True
        return False

    def add(self, tokens: Union[str, Iterable[str]]) -> "SemiExpression":
        """Append a single token or every token of an iterable."""
        if isinstance(tokens, str):
            self._tokens.append(tokens)
        else:
            self._tokens.extend(tokens)
        return self

    def remove(self, item: Union[int, str]) -> bool:
        """
        Remove a token by index, or the first token equal to a string.

        Returns:
            False if the index is out of range or the token is absent
        """
        if isinstance(item, int):
            if 0 <= item < len(self._tokens):
                del self._tokens[item]
                return True
            return False

        if item in self._tokens:
            self._tokens.remove(item)
            return True
        return False

    def flush(self) -> None:
        """Remove all tokens."""
        self._tokens.clear()

    def initialize(self) -> bool:
        """
        Load a single ";" into an empty unit, for testing.

        Returns:
            False if the unit is not empty
        """
        if self._tokens:
            return False
        self._tokens.append(";")
        return True

    @staticmethod
    def is_whitespace(tok: str) -> bool:
        return bool(tok) and tok[0].isspace()

    @staticmethod
    def is_comment(tok: str) -> bool:
        return tok.startswith("//") or tok.startswith("/*")

    def trim(self) -> None:
        """Remove whitespace tokens, including newline markers."""
        self._tokens = [tok for tok in self._tokens if not self.is_whitespace(tok)]

    def clone(self) -> "SemiExpression":
        """Copy of the current tokens, detached from any source."""
        copy = SemiExpression(self.options, self._toker.registry.copy())
        copy.return_newlines = self.return_newlines
        copy.discard_comments = self.discard_comments
        copy.add(self._tokens)
        return copy

    # =========================================================================
    # Comparison and Display
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemiExpression):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash(tuple(self._tokens))

    def display_str(self) -> str:
        """
        Render the unit on one line.

        Tokens are separated by single spaces. A ";" attaches to the token
        before it, and nothing follows a token that ends in its only
        newline.

            ["x", "=", "1", ";"]  ->  "x = 1;"
        """
        parts: List[str] = []
        separate = False
        for tok in self._tokens:
            if separate and tok != ";":
                parts.append(" ")
            parts.append(tok)
            separate = tok.find("\n") != len(tok) - 1
        return "".join(parts)

    def display(self, file: Optional[TextIO] = None) -> None:
        print(f" -- {self.display_str()}", file=file or sys.stdout)

    def __str__(self) -> str:
        return self.display_str()

    def __repr__(self) -> str:
        return f"SemiExpression({self._tokens!r})"

    # =========================================================================
    # Special Character Rules
    # =========================================================================

    def set_special_single_chars(self, ch: str) -> bool:
        return self._toker.set_special_single_chars(ch)

    def set_special_char_pairs(self, pair: str) -> bool:
        return self._toker.set_special_char_pairs(pair)

    def print_special_single_chars(self, file: Optional[TextIO] = None) -> bool:
        return self._toker.print_special_single_chars(file)

    def print_special_char_pairs(self, file: Optional[TextIO] = None) -> bool:
        return self._toker.print_special_char_pairs(file)
