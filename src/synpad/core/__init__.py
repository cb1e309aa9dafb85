"""
Core package for syntax classification.

This package implements the classification engine: the character scanner
for built-in languages, the pattern matcher for user-defined modes, and the
registry that stores those modes.
"""

from .engine import SyntaxEngine
from .errors import DefinitionError, StorageError, SynpadError
from .keywords import KeywordTable
from .modes import CustomLanguageDefinition, PatternRule
from .patterns import PatternMatcher, classify, flatten
from .registry import CustomModeRegistry
from .scanner import LineScanner, scan
from .storage import JsonFileStore, MemoryStore
from .tokens import PatternCategory, Span, TokenCategory

__all__ = [
    'SyntaxEngine',
    'DefinitionError',
    'StorageError',
    'SynpadError',
    'KeywordTable',
    'CustomLanguageDefinition',
    'PatternRule',
    'PatternMatcher',
    'classify',
    'flatten',
    'CustomModeRegistry',
    'LineScanner',
    'scan',
    'JsonFileStore',
    'MemoryStore',
    'PatternCategory',
    'Span',
    'TokenCategory',
]
