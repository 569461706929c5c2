"""
Lexical Scanner - Configuration
===============================

Scanner configuration. Values can come from:
- Default values (defined here)
- Keyword arguments
- Environment variables (ScannerOptions.from_env)
"""

from dataclasses import dataclass, field
from typing import List
import os

from lexscan.states import SpecialCharRegistry


@dataclass
class ScannerOptions:
    """
    Configuration for a Toker or SemiExpression.

    Attributes:
        encoding: Text encoding for file sources. The default "utf-8-sig"
            strips a leading byte-order marker.
        strict: Raise ScanError subclasses for unterminated block comments,
            quoted literals and for(...) headers instead of scanning to
            the end of the source.
        return_newlines: Insert a "\\n" marker token before "using" and "#"
            in semi-expressions.
        discard_comments: Skip comment tokens when building semi-expressions.
        verbose: Log every completed semi-expression at DEBUG level.
        extra_single_chars: Characters added to the default special
            single character table.
        extra_char_pairs: Two-character strings added to the default
            special pair table.
    """

    encoding: str = "utf-8-sig"
    strict: bool = False
    return_newlines: bool = True
    discard_comments: bool = False
    verbose: bool = False
    extra_single_chars: List[str] = field(default_factory=list)
    extra_char_pairs: List[str] = field(default_factory=list)

    def build_registry(self) -> SpecialCharRegistry:
        """Return a fresh default registry extended with the extra entries."""
        registry = SpecialCharRegistry()
        for ch in self.extra_single_chars:
            registry.add_single(ch)
        for pair in self.extra_char_pairs:
            registry.add_pair(pair)
        return registry

    @classmethod
    def from_env(cls) -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Environment variables (all optional):
            LEXSCAN_ENCODING: File encoding (e.g., "latin-1")
            LEXSCAN_STRICT: "1", "true" or "yes" enables strict mode
            LEXSCAN_SINGLE_CHARS: Extra special single characters, e.g. "|&"
            LEXSCAN_CHAR_PAIRS: Extra special pairs, comma separated, e.g. "->,!="

        Returns:
            ScannerOptions with values from environment variables
        """
        options = cls()

        if encoding := os.environ.get("LEXSCAN_ENCODING"):
            options.encoding = encoding

        if strict := os.environ.get("LEXSCAN_STRICT"):
            options.strict = strict.strip().lower() in ("1", "true", "yes")

        if singles := os.environ.get("LEXSCAN_SINGLE_CHARS"):
            options.extra_single_chars.extend(ch for ch in singles if not ch.isspace())

        if pairs := os.environ.get("LEXSCAN_CHAR_PAIRS"):
            for pair in pairs.split(","):
                pair = pair.strip()
                if len(pair) == 2:
                    options.extra_char_pairs.append(pair)

        return options
