"""
Tokenizer (Toker)
=================

The Toker drives the token state machine over a character source and
hands out tokens one at a time. Whitespace tokens are discarded, so the
token stream never contains a standalone whitespace token. Comments and
quoted literals are returned as single tokens with their delimiters.

End of input is reported by get_tok() returning None.

Example Usage
-------------
>>> from lexscan.toker import Toker
>>> toker = Toker()
>>> toker.open_string('if (a == b) { s = "x;y"; }')
True
>>> list(toker.tokens())
['if', '(', 'a', '==', 'b', ')', '{', 's', '=', '"x;y"', ';', '}']

Special Characters
------------------
The special character registry decides which characters and pairs are
always atomic tokens. It can be extended between calls to get_tok():

>>> toker = Toker()
>>> toker.open_string("a|=b")
True
>>> toker.set_special_single_chars("|")
True
>>> list(toker.tokens())
['a', '|', '=', 'b']
"""

from pathlib import Path
from typing import Iterator, Optional, TextIO, Union
import logging

from lexscan.config import ScannerOptions
from lexscan.source import CharacterSource
from lexscan.states import SpecialCharRegistry, extract_token, next_state


logger = logging.getLogger(__name__)


class Toker:
    """
    Tokenizes text from a file or string.

    The next state is selected at the start of every extraction, so
    registry changes made between get_tok() calls apply immediately.

    Usage:
        with Toker() as toker:
            if toker.open("Program.cs"):
                while (tok := toker.get_tok()) is not None:
                    print(toker.line_count(), tok)

    Attributes:
        options: Scanner configuration
        registry: Special character registry owned by this tokenizer
    """

    def __init__(
        self,
        options: Optional[ScannerOptions] = None,
        registry: Optional[SpecialCharRegistry] = None,
    ):
        self.options = options or ScannerOptions()
        self.registry = registry if registry is not None else self.options.build_registry()
        self._source = CharacterSource(self.options.encoding)

    # =========================================================================
    # Source Management
    # =========================================================================

    def open(self, path: Union[str, Path]) -> bool:
        """
        Attach the tokenizer to a file.

        Returns:
            True on success, False if the file cannot be opened
        """
        return self._source.open(path)

    def open_string(self, text: str, name: str = "<string>") -> bool:
        """Attach the tokenizer to an in-memory string."""
        return self._source.open_string(text, name)

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> "Toker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def source(self) -> CharacterSource:
        return self._source

    @property
    def name(self) -> str:
        """Name of the attached source."""
        return self._source.name

    # =========================================================================
    # Token Extraction
    # =========================================================================

    def _next_raw(self) -> Optional[str]:
        """Extract the next token of any state, whitespace included."""
        state = next_state(self._source, self.registry)
        if state is None:
            return None
        return extract_token(state, self._source, self.options.strict)

    def get_tok(self) -> Optional[str]:
        """
        Extract the next non-whitespace token.

        Returns:
            The token text, or None once the source is exhausted

        Raises:
            UnterminatedTokenError: In strict mode, for a block comment or
                quoted literal that reaches the end of the source
        """
        while True:
            tok = self._next_raw()
            if tok is None or not tok[0].isspace():
                return tok

    def tokens(self) -> Iterator[str]:
        """Yield non-whitespace tokens until the source is exhausted."""
        while (tok := self.get_tok()) is not None:
            yield tok

    def raw_tokens(self) -> Iterator[str]:
        """
        Yield every token, whitespace included.

        Joining the yielded tokens reproduces the remaining source text.
        """
        while (tok := self._next_raw()) is not None:
            yield tok

    def is_done(self) -> bool:
        """True once no characters remain in the source."""
        return self._source.end()

    def line_count(self) -> int:
        """Line number of the last character consumed (1-indexed)."""
        return self._source.line_count

    # =========================================================================
    # Special Character Rules
    # =========================================================================

    def set_special_single_chars(self, ch: str) -> bool:
        """Add a character to the special single character table."""
        if self.registry.add_single(ch):
            logger.debug(f"Added special single char {ch!r}")
        return True

    def set_special_char_pairs(self, pair: str) -> bool:
        """Add a two-character string to the special pair table."""
        if self.registry.add_pair(pair):
            logger.debug(f"Added special char pair {pair!r}")
        return True

    def print_special_single_chars(self, file: Optional[TextIO] = None) -> bool:
        self.registry.print_singles(file)
        return True

    def print_special_char_pairs(self, file: Optional[TextIO] = None) -> bool:
        self.registry.print_pairs(file)
        return True
