"""
Token State Machine
===================

This module classifies raw characters into tokens. It is a closed set of
states, each with one extraction function, plus a selection function that
looks at the next one or two characters to decide which state extracts
the next token.

States
------
| State               | Token                                         |
|---------------------|-----------------------------------------------|
| WHITESPACE          | run of whitespace (filtered out by Toker)     |
| ALPHA               | letters, digits, underscore, leading '@'      |
| PUNCTUATION         | any other single punctuation/symbol char      |
| SPECIAL_SINGLE      | single char from the registry                 |
| SPECIAL_PAIR        | two-char string from the registry             |
| SINGLE_LINE_COMMENT | // ... through the newline                    |
| BLOCK_COMMENT       | /* ... */                                     |
| QUOTED_LITERAL      | "..." or '...' with backslash escapes         |

Selection
---------
Registry pairs are checked before comments, and comments before registry
singles, so with the default tables "//" is a comment while "::" and "=="
are atomic pairs.

Every extraction function expects the source's next character to belong
to its state (next_state() guarantees this) and consumes exactly one
token's worth of characters, never reaching into the next token.

Example Usage
-------------
>>> from lexscan.source import CharacterSource
>>> from lexscan.states import SpecialCharRegistry, next_state, extract_token
>>> src = CharacterSource.from_string("a==b")
>>> registry = SpecialCharRegistry()
>>> state = next_state(src, registry)
>>> state, extract_token(state, src)
(<TokenState.ALPHA: 2>, 'a')
>>> state = next_state(src, registry)
>>> state, extract_token(state, src)
(<TokenState.SPECIAL_PAIR: 5>, '==')
"""

from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional, TextIO
import logging
import sys
import unicodedata

from lexscan.errors import RegistryError, SourceLocation, UnterminatedTokenError
from lexscan.source import CharacterSource, END


logger = logging.getLogger(__name__)


# =============================================================================
# Special Character Registry
# =============================================================================

DEFAULT_SPECIAL_SINGLE_CHARS = (
    "<", ">", "[", "]", "(", ")", "{", "}", ":", "=", "+", "-", "*",
)

DEFAULT_SPECIAL_CHAR_PAIRS = (
    "<<", ">>", "::", "++", "--", "==", "+=", "-=", "*=", "/=", "&&", "||",
)


class SpecialCharRegistry:
    """
    Characters and character pairs that are always emitted as one token.

    Both tables are ordered and free of duplicates. They can be extended
    at runtime; changes apply to the next token selection.

    Attributes:
        singles: Special single characters, in registration order
        pairs: Special two-character strings, in registration order
    """

    def __init__(
        self,
        singles: Iterable[str] = DEFAULT_SPECIAL_SINGLE_CHARS,
        pairs: Iterable[str] = DEFAULT_SPECIAL_CHAR_PAIRS,
    ):
        self._singles: List[str] = []
        self._pairs: List[str] = []
        for ch in singles:
            self.add_single(ch)
        for pair in pairs:
            self.add_pair(pair)

    @property
    def singles(self) -> tuple:
        return tuple(self._singles)

    @property
    def pairs(self) -> tuple:
        return tuple(self._pairs)

    def add_single(self, ch: str) -> bool:
        """
        Register a special single character.

        Returns:
            True if added, False if it was already registered

        Raises:
            RegistryError: If ch is not exactly one character
        """
        if not isinstance(ch, str) or len(ch) != 1:
            raise RegistryError(f"special single char must be one character, got {ch!r}")
        if ch in self._singles:
            return False
        self._singles.append(ch)
        return True

    def add_pair(self, pair: str) -> bool:
        """
        Register a special character pair.

        Returns:
            True if added, False if it was already registered

        Raises:
            RegistryError: If pair is not exactly two characters
        """
        if not isinstance(pair, str) or len(pair) != 2:
            raise RegistryError(f"special char pair must be two characters, got {pair!r}")
        if pair in self._pairs:
            return False
        self._pairs.append(pair)
        return True

    def is_special_single(self, ch: str) -> bool:
        return ch in self._singles

    def is_special_pair(self, pair: str) -> bool:
        return pair in self._pairs

    def copy(self) -> "SpecialCharRegistry":
        return SpecialCharRegistry(self._singles, self._pairs)

    def format_singles(self) -> str:
        """Render the single character table, e.g. {'<' '>' ...}"""
        return "{" + " ".join(f"'{ch}'" for ch in self._singles) + "}"

    def format_pairs(self) -> str:
        """Render the pair table, e.g. {"<<" ">>" ...}"""
        return "{" + " ".join(f'"{pair}"' for pair in self._pairs) + "}"

    def print_singles(self, file: Optional[TextIO] = None) -> None:
        print("The special single chars are:", file=file or sys.stdout)
        print(self.format_singles(), file=file or sys.stdout)

    def print_pairs(self, file: Optional[TextIO] = None) -> None:
        print("The special char pairs are:", file=file or sys.stdout)
        print(self.format_pairs(), file=file or sys.stdout)

    def __repr__(self) -> str:
        return f"SpecialCharRegistry(singles={self._singles!r}, pairs={self._pairs!r})"


# =============================================================================
# Token States
# =============================================================================

class TokenState(Enum):
    """The token classes the state machine can extract."""

    WHITESPACE = auto()
    ALPHA = auto()
    PUNCTUATION = auto()
    SPECIAL_SINGLE = auto()
    SPECIAL_PAIR = auto()
    SINGLE_LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    QUOTED_LITERAL = auto()


QUOTE_CHARS = "\"'"


# =============================================================================
# Character Classes
# =============================================================================

def is_whitespace(ch: str) -> bool:
    return ch != END and ch.isspace()


def is_alpha(ch: str) -> bool:
    """Letter, digit or underscore."""
    return ch != END and (ch.isalnum() or ch == "_")


def is_punctuation(ch: str) -> bool:
    """Unicode punctuation (P*) or symbol (S*) character."""
    return ch != END and unicodedata.category(ch)[0] in "PS"


# =============================================================================
# State Selection
# =============================================================================

def next_state(source: CharacterSource, registry: SpecialCharRegistry) -> Optional[TokenState]:
    """
    Choose the state that extracts the next token.

    Looks at up to two characters without consuming them.

    Returns:
        The next TokenState, or None once the source is exhausted
    """
    c1 = source.peek()
    if c1 == END:
        return None

    if c1.isspace():
        return TokenState.WHITESPACE

    if is_alpha(c1) or c1 == "@":
        return TokenState.ALPHA

    # Everything else takes the punctuation path
    if c1 in QUOTE_CHARS:
        return TokenState.QUOTED_LITERAL

    c2 = source.peek(1)
    if is_punctuation(c2):
        pair = c1 + c2
        if registry.is_special_pair(pair):
            return TokenState.SPECIAL_PAIR
        if pair == "//":
            return TokenState.SINGLE_LINE_COMMENT
        if pair == "/*":
            return TokenState.BLOCK_COMMENT

    if registry.is_special_single(c1):
        return TokenState.SPECIAL_SINGLE
    return TokenState.PUNCTUATION


# =============================================================================
# Extraction Functions
# =============================================================================

def _unterminated(
    kind: str,
    terminator: str,
    source: CharacterSource,
    start_line: int,
    strict: bool,
) -> None:
    location = SourceLocation(source.name, start_line)
    if strict:
        raise UnterminatedTokenError(kind, terminator, location)
    logger.warning(f"{location}: unterminated {kind} runs to end of file")


def _extract_run(source: CharacterSource, in_class: Callable[[str], bool]) -> str:
    chars = [source.next()]
    while in_class(source.peek()):
        chars.append(source.next())
    return "".join(chars)


def _extract_whitespace(source: CharacterSource, strict: bool) -> str:
    return _extract_run(source, is_whitespace)


def _extract_alpha(source: CharacterSource, strict: bool) -> str:
    # '@' is accepted only as the first character
    return _extract_run(source, is_alpha)


def _extract_single(source: CharacterSource, strict: bool) -> str:
    return source.next()


def _extract_pair(source: CharacterSource, strict: bool) -> str:
    return source.next() + source.next()


def _extract_line_comment(source: CharacterSource, strict: bool) -> str:
    """Consume '//' through the newline, or to end of file."""
    chars = [source.next()]
    while True:
        ch = source.next()
        if ch == END:
            break
        chars.append(ch)
        if ch == "\n":
            break
    return "".join(chars)


def _extract_block_comment(source: CharacterSource, strict: bool) -> str:
    """Consume '/*' through the first '*/'."""
    start_line = source.line_count
    chars = [source.next()]
    prev = chars[0]
    while True:
        ch = source.next()
        if ch == END:
            _unterminated("block comment", "*/", source, start_line, strict)
            break
        chars.append(ch)
        # The opening '/' never pairs with a '*' seen before it
        if ch == "/" and prev == "*" and len(chars) > 3:
            break
        prev = ch
    return "".join(chars)


def _extract_quoted(source: CharacterSource, strict: bool) -> str:
    """
    Consume a quoted literal including both quotes.

    A quote matching the opener ends the literal unless it is preceded
    by an odd number of consecutive backslashes.
    """
    start_line = source.line_count
    quote = source.next()
    chars = [quote]
    backslashes = 0
    while True:
        ch = source.next()
        if ch == END:
            _unterminated("quoted literal", quote, source, start_line, strict)
            break
        chars.append(ch)
        if ch == quote and backslashes % 2 == 0:
            break
        backslashes = backslashes + 1 if ch == "\\" else 0
    return "".join(chars)


_EXTRACTORS: Dict[TokenState, Callable[[CharacterSource, bool], str]] = {
    TokenState.WHITESPACE: _extract_whitespace,
    TokenState.ALPHA: _extract_alpha,
    TokenState.PUNCTUATION: _extract_single,
    TokenState.SPECIAL_SINGLE: _extract_single,
    TokenState.SPECIAL_PAIR: _extract_pair,
    TokenState.SINGLE_LINE_COMMENT: _extract_line_comment,
    TokenState.BLOCK_COMMENT: _extract_block_comment,
    TokenState.QUOTED_LITERAL: _extract_quoted,
}


def extract_token(state: TokenState, source: CharacterSource, strict: bool = False) -> str:
    """
    Extract one token of the given state from the source.

    Args:
        state: State chosen by next_state() for the current position
        source: Character source positioned at the token's first character
        strict: Raise UnterminatedTokenError instead of scanning to end of file

    Returns:
        The token text
    """
    return _EXTRACTORS[state](source, strict)
