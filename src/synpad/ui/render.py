"""
Rendering of classified lines through pygments formatters.
"""

from typing import Any, Dict, Final, Iterator, List, Sequence, Tuple, Type

from pygments import format as pygments_format
from pygments.formatters import get_formatter_by_name
from pygments.style import Style
from pygments.token import Token, _TokenType

from ..core.tokens import Category, PatternCategory, Span, TokenCategory
from .theme import Appearance, ThemeManager

CATEGORY_TOKEN_MAP: Final[Dict[Category, _TokenType]] = {
    TokenCategory.KEYWORD: Token.Keyword,
    TokenCategory.STRING: Token.String,
    TokenCategory.COMMENT: Token.Comment,
    TokenCategory.NUMBER: Token.Number,
    TokenCategory.OPERATOR: Token.Operator,
    TokenCategory.IDENTIFIER: Token.Name,
    TokenCategory.PLAIN: Token.Text,

    PatternCategory.COMMENT: Token.Comment,
    PatternCategory.KEYWORD: Token.Keyword,
    PatternCategory.STRING: Token.String,
    PatternCategory.NUMBER: Token.Number,
    PatternCategory.TYPE: Token.Keyword.Type,
    PatternCategory.CONSTANT: Token.Keyword.Constant,
    PatternCategory.UNKNOWN: Token.Name.Other,
}

FORMATTER_ALIASES: Final[Dict[str, str]] = {
    'terminal256': 'terminal256',
    'truecolor': 'terminal16m',
    'html': 'html',
}


def token_type_for(category: Category) -> _TokenType:
    return CATEGORY_TOKEN_MAP.get(category, Token.Text)


def build_style(themes: ThemeManager, appearance: Appearance = Appearance.DARK) -> Type[Style]:
    """
    Create a pygments style from the current theme.

    Each token type gets the color `ThemeManager.color_for` assigns to the
    category mapped onto it.
    """

    theme_styles: Dict[Any, str] = {Token: themes.foreground(appearance)}
    for category, token_type in CATEGORY_TOKEN_MAP.items():
        theme_styles[token_type] = themes.color_for(category, appearance)

    class SynpadStyle(Style):
        background_color = themes.background(appearance)
        styles = theme_styles

    return SynpadStyle


def line_tokens(line: str, spans: Sequence[Span]) -> Iterator[Tuple[_TokenType, str]]:
    """Yield (token type, text) pairs covering the whole line, gaps as plain text."""

    pos = 0
    for span in spans:
        if span.start > pos:
            yield Token.Text, line[pos:span.start]

        yield token_type_for(span.category), span.text
        pos = span.end

    if pos < len(line):
        yield Token.Text, line[pos:]


def document_tokens(lines: Sequence[str], spans: Sequence[Sequence[Span]]) -> List[Tuple[_TokenType, str]]:
    tokens: List[Tuple[_TokenType, str]] = []
    for line, line_spans in zip(lines, spans):
        tokens.extend(line_tokens(line, line_spans))
        tokens.append((Token.Text, '\n'))

    return tokens


def render(lines: Sequence[str], spans: Sequence[Sequence[Span]], themes: ThemeManager,
           appearance: Appearance = Appearance.DARK, output_format: str = 'terminal256') -> str:
    """
    Render classified lines.

    Args:
        lines: The lines of the document
        spans: The spans of each line, as returned by the engine
        themes: Theme lookup used to pick colors
        appearance: Light or dark appearance
        output_format: One of 'terminal256', 'truecolor' or 'html'

    Returns:
        The formatted document

    Raises:
        ValueError: For an unknown output format
    """

    formatter_name = FORMATTER_ALIASES.get(output_format)
    if formatter_name is None:
        raise ValueError(f"Unknown output format: {output_format}")

    options: Dict[str, Any] = {'style': build_style(themes, appearance)}
    if formatter_name == 'html':
        options['full'] = True
        options['title'] = themes.current.name

    formatter = get_formatter_by_name(formatter_name, **options)

    return pygments_format(document_tokens(lines, spans), formatter)
