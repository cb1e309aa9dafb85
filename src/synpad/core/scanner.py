"""
Character scanner that classifies a single line of a built-in language.

Each line is scanned on its own. Nothing is carried between calls, so a
block comment or string that spans several lines is only recognized on the
line where it starts (and only as far as the line-level rules allow).
"""

import logging
from typing import AbstractSet, Final, FrozenSet, List, Optional

from .tokens import Span, TokenCategory

logger = logging.getLogger(__name__)

LINE_COMMENT: Final[str] = '//'
STRING_QUOTE: Final[str] = '"'
ESCAPE: Final[str] = '\\'

OPERATOR_CHARS: Final[FrozenSet[str]] = frozenset('+-*/=!<>&|%^~.')
TWO_CHAR_OPERATORS: Final[FrozenSet[str]] = frozenset({
    '==', '!=', '<=', '>=', '&&', '||', '->',
})

DEFAULT_MAX_LINE_LENGTH: Final[int] = 10_000


def _scan_string(line: str, start: int) -> int:
    """Return the end offset of the string literal opening at `start`."""

    pos = start + 1
    length = len(line)

    while pos < length and line[pos] != STRING_QUOTE:
        if line[pos] == ESCAPE and pos + 1 < length:
            pos += 2
        else:
            pos += 1

    if pos < length:
        pos += 1

    return pos


def _scan_word(line: str, start: int) -> int:
    pos = start
    while pos < len(line) and (line[pos].isalnum() or line[pos] == '_'):
        pos += 1

    return pos


def _scan_number(line: str, start: int) -> int:
    # Any run of digits and dots: "1.2.3" is one number.
    pos = start
    while pos < len(line) and (line[pos].isdigit() or line[pos] == '.'):
        pos += 1

    return pos


def _scan_operator(line: str, start: int) -> int:
    if line[start:start + 2] in TWO_CHAR_OPERATORS:
        return start + 2

    return start + 1


def scan(line: str, keywords: AbstractSet[str],
         max_length: Optional[int] = None) -> List[Span]:
    """
    Classify one line of source text.

    Rules are tried in a fixed order at every position: whitespace, line
    comment, string literal, word, number, operator. The first rule that
    applies consumes its longest match. Characters no rule accepts are
    skipped without producing a span.

    Args:
        line: The text of a single line, without its line terminator
        keywords: Reserved words of the language, matched case-sensitively
        max_length: Only the first `max_length` characters are classified

    Returns:
        Spans in increasing, non-overlapping offset order
    """

    if max_length is not None and len(line) > max_length:
        logger.debug("Line of %d characters truncated to %d for scanning", len(line), max_length)
        line = line[:max_length]

    spans: List[Span] = []
    pos = 0
    length = len(line)

    while pos < length:
        char = line[pos]

        if char.isspace():
            pos += 1
            continue

        if line.startswith(LINE_COMMENT, pos):
            spans.append(Span(line[pos:], TokenCategory.COMMENT, pos, length))
            break

        if char == STRING_QUOTE:
            end = _scan_string(line, pos)
            spans.append(Span(line[pos:end], TokenCategory.STRING, pos, end))
            pos = end
            continue

        if char.isalpha() or char == '_':
            end = _scan_word(line, pos)
            word = line[pos:end]
            category = TokenCategory.KEYWORD if word in keywords else TokenCategory.IDENTIFIER
            spans.append(Span(word, category, pos, end))
            pos = end
            continue

        if char.isdigit():
            end = _scan_number(line, pos)
            spans.append(Span(line[pos:end], TokenCategory.NUMBER, pos, end))
            pos = end
            continue

        if char in OPERATOR_CHARS:
            end = _scan_operator(line, pos)
            spans.append(Span(line[pos:end], TokenCategory.OPERATOR, pos, end))
            pos = end
            continue

        pos += 1

    return spans


class LineScanner:
    """Scanner bound to one language's keyword set."""

    def __init__(self, keywords: AbstractSet[str],
                 max_length: Optional[int] = DEFAULT_MAX_LINE_LENGTH) -> None:
        self.keywords = frozenset(keywords)
        self.max_length = max_length

    def scan(self, line: str) -> List[Span]:
        return scan(line, self.keywords, self.max_length)

    def scan_lines(self, lines: List[str]) -> List[List[Span]]:
        return [self.scan(line) for line in lines]
