"""
Token categories and spans produced by the classifiers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TokenCategory(str, Enum):
    """Categories emitted by the line scanner."""

    KEYWORD = 'keyword'
    STRING = 'string'
    COMMENT = 'comment'
    NUMBER = 'number'
    OPERATOR = 'operator'
    IDENTIFIER = 'identifier'
    PLAIN = 'plain'


class PatternCategory(str, Enum):
    """Categories a custom pattern rule may be tagged with."""

    COMMENT = 'comment'
    KEYWORD = 'keyword'
    STRING = 'string'
    NUMBER = 'number'
    TYPE = 'type'
    CONSTANT = 'constant'
    UNKNOWN = 'unknown'

    @classmethod
    def parse(cls, name: str) -> 'PatternCategory':
        """
        Parse a color name from a pattern rule.

        Args:
            name: Category name as written by the user, any case

        Returns:
            The matching category, or UNKNOWN for anything unrecognized
        """

        try:
            return cls((name or '').strip().lower())
        except ValueError:
            return cls.UNKNOWN


Category = Union[TokenCategory, PatternCategory]


@dataclass(frozen=True)
class Span:
    """A classified substring of one line, covering [start, end)."""

    text: str
    category: Category
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start
