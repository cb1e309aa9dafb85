"""
Entry point tying the line scanner, the pattern matcher and the registry together.
"""

import logging
import os
import re
from typing import Final, Iterable, List, Optional, Tuple, Union

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .keywords import DEFAULT_KEYWORD_TABLE, KeywordTable
from .modes import CustomLanguageDefinition
from .patterns import PatternMatcher
from .registry import CustomModeRegistry
from .scanner import DEFAULT_MAX_LINE_LENGTH, scan
from .tokens import Span

logger = logging.getLogger(__name__)

Language = Union[str, CustomLanguageDefinition]

CONTENT_PATTERNS: Final[Tuple[Tuple[str, str], ...]] = (
    (r'^#!.*\b(bash|sh|zsh)\b', 'shell'),
    (r'^#!.*\bpython', 'python'),
    (r'^#!.*\bnode\b', 'javascript'),
    (r'^\s*(import\s+(Foundation|SwiftUI|UIKit)|func\s+\w+\s*\(.*\)\s*(->|\{)|guard\s+let)', 'swift'),
    (r'^\s*(def\s+\w+\s*\(|from\s+\w+(\.\w+)*\s+import|if __name__ == [\'"]__main__[\'"])', 'python'),
    (r'^\s*(interface\s+\w+|type\s+\w+\s*=|export\s+type)', 'typescript'),
    (r'^\s*(function\s+\w+\s*\(|const\s+\w+\s*=|let\s+\w+\s*=|module\.exports)', 'javascript'),
)


class SyntaxEngine:
    """
    Classifies lines for built-in languages and custom definitions.

    Built-in language names go through the character scanner with the
    language's keyword set. Custom definitions go through the pattern
    matcher and have overlapping matches resolved so that later rules win.
    """

    def __init__(self, keywords: Optional[KeywordTable] = None,
                 registry: Optional[CustomModeRegistry] = None,
                 max_line_length: Optional[int] = DEFAULT_MAX_LINE_LENGTH) -> None:
        self.keywords = keywords if keywords is not None else DEFAULT_KEYWORD_TABLE
        self.registry = registry
        self.max_line_length = max_line_length
        self.matcher = PatternMatcher()
        if registry is not None:
            registry.add_listener(self.matcher.invalidate)

    def classify_line(self, line: str, language: Optional[Language]) -> List[Span]:
        """
        Classify a single line.

        Args:
            line: The line text without its terminator
            language: A built-in language name, a custom definition, or None

        Returns:
            Ordered, non-overlapping spans. Unknown languages still get
            identifiers, numbers, strings and operators, just no keywords.
        """

        if isinstance(language, CustomLanguageDefinition):
            if self.max_line_length is not None:
                line = line[:self.max_line_length]

            return self.matcher.spans(line, language)

        return scan(line, self.keywords.keywords_for(language or ''), self.max_line_length)

    def classify_lines(self, lines: Iterable[str], language: Optional[Language]) -> List[List[Span]]:
        return [self.classify_line(line, language) for line in lines]

    def classify_text(self, text: str, language: Optional[Language]) -> List[List[Span]]:
        return self.classify_lines(text.splitlines(), language)

    def detect_builtin(self, filename: str, content: str = '') -> Optional[str]:
        """
        Detect the built-in language of a file.

        The file name is looked up with pygments first; the aliases of the
        lexer it finds are matched against the keyword table. When that gives
        nothing, the content is checked against a few telltale patterns.

        Args:
            filename: Name or path of the file
            content: Optional beginning of the file

        Returns:
            The canonical built-in language name, or None
        """

        try:
            lexer = get_lexer_for_filename(os.path.basename(filename))
        except ClassNotFound:
            lexer = None

        if lexer is not None:
            for alias in [lexer.name] + list(lexer.aliases):
                name = self.keywords.canonical_name(alias)
                if name is not None:
                    logger.debug("Detected %s for %s from lexer %s", name, filename, lexer.name)
                    return name

        for pattern, language in CONTENT_PATTERNS:
            if re.search(pattern, content, re.MULTILINE):
                logger.debug("Detected %s for %s from content", language, filename)
                return language

        return None

    def resolve(self, filename: str, content: str = '') -> Optional[Language]:
        """
        Pick how a file should be classified.

        A custom definition claiming the file's extension takes priority
        over any built-in language.

        Returns:
            A custom definition, a built-in language name, or None
        """

        extension = os.path.splitext(filename)[1]
        if self.registry is not None and extension:
            mode = self.registry.resolve_extension(extension)
            if mode is not None:
                logger.debug("Using custom mode '%s' for %s", mode.name, filename)
                return mode

        return self.detect_builtin(filename, content)
