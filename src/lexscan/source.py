"""
Character Source
================

A pull-based, peekable supply of characters for the token state machine.

The source reads its underlying text stream one character at a time.
Characters looked at with peek() are queued lazily and handed out again
by next(), so peeking never disturbs what a later next() returns:

    source.peek(1)   # reads two characters into the queue
    source.next()    # drains the first queued character
    source.peek(0)   # the second queued character, no read

End of input is reported with END (the empty string) rather than an
exception. Only genuine I/O failures propagate.

Line Tracking
-------------
line_count starts at 1 and increments once for every newline returned
by next(). Peeking at a newline does not count it.

Example Usage
-------------
>>> from lexscan.source import CharacterSource
>>> src = CharacterSource()
>>> src.open_string("ab\\nc")
True
>>> src.peek(2)
'\\n'
>>> src.next(), src.next(), src.next()
('a', 'b', '\\n')
>>> src.line_count
2
"""

from collections import deque
from pathlib import Path
from typing import Deque, Optional, TextIO, Union
import io
import logging

from lexscan.errors import SourceOpenError


logger = logging.getLogger(__name__)

# Returned by next() and peek() once the source is exhausted
END = ""


class CharacterSource:
    """
    Peekable character stream over a file or string.

    Attributes:
        encoding: Encoding used for file sources
        name: File name of the attached source, "<string>" for strings
        line_count: Current line number (1-indexed)
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding
        self.name = "<none>"
        self.line_count = 1

        self._stream: Optional[TextIO] = None
        self._queue: Deque[str] = deque()

    @classmethod
    def from_file(cls, path: Union[str, Path], encoding: str = "utf-8-sig") -> "CharacterSource":
        """
        Create a source attached to a file.

        Raises:
            SourceOpenError: If the file cannot be opened
        """
        source = cls(encoding)
        source._attach_file(path)
        return source

    @classmethod
    def from_string(cls, text: str, name: str = "<string>") -> "CharacterSource":
        """Create a source attached to an in-memory string."""
        source = cls()
        source.open_string(text, name)
        return source

    # =========================================================================
    # Opening and Closing
    # =========================================================================

    def open(self, path: Union[str, Path]) -> bool:
        """
        Attach the source to a file.

        Returns:
            True on success, False if the file cannot be opened
        """
        try:
            self._attach_file(path)
        except SourceOpenError as e:
            logger.warning(str(e))
            return False
        return True

    def open_string(self, text: str, name: str = "<string>") -> bool:
        """Attach the source to an in-memory string. Always succeeds."""
        self.close()
        self._reset(io.StringIO(text), name)
        logger.debug(f"Opened string source ({len(text)} chars)")
        return True

    def close(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None
            logger.debug(f"Closed {self.name}")
        self._queue.clear()

    @property
    def is_open(self) -> bool:
        """True while a stream is attached."""
        return self._stream is not None

    def __enter__(self) -> "CharacterSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _attach_file(self, path: Union[str, Path]) -> None:
        self.close()
        self.name = "<none>"
        self.line_count = 1
        try:
            stream = open(path, "r", encoding=self.encoding, newline="")
        except FileNotFoundError:
            raise SourceOpenError(str(path), "file not found")
        except IsADirectoryError:
            raise SourceOpenError(str(path), "is a directory")
        except PermissionError:
            raise SourceOpenError(str(path), "permission denied")
        except OSError as e:
            raise SourceOpenError(str(path), e.strerror or str(e))
        self._reset(stream, str(path))
        logger.debug(f"Opened {path} (encoding={self.encoding})")

    def _reset(self, stream: TextIO, name: str) -> None:
        self._stream = stream
        self._queue.clear()
        self.name = name
        self.line_count = 1

    # =========================================================================
    # Character Access
    # =========================================================================

    def _read(self) -> str:
        """Read one character from the stream, END when exhausted."""
        if self._stream is None:
            return END
        return self._stream.read(1)

    def next(self) -> str:
        """
        Consume and return the next character.

        Queued characters from earlier peeks are returned first. Returns
        END once the source is exhausted.
        """
        if self._queue:
            ch = self._queue.popleft()
        else:
            ch = self._read()
            if ch == END:
                return END

        if ch == "\n":
            self.line_count += 1
        return ch

    def peek(self, n: int = 0) -> str:
        """
        Return the character n positions ahead without consuming it.

        Args:
            n: Offset from the next character (0 = the next character)

        Returns:
            The character, or END if the source ends before position n
        """
        if n < 0:
            raise ValueError(f"peek offset must be >= 0, got {n}")

        while len(self._queue) <= n:
            ch = self._read()
            if ch == END:
                return END
            self._queue.append(ch)

        return self._queue[n]

    def end(self) -> bool:
        """True when no characters remain, queued or unread."""
        return self.peek() == END
