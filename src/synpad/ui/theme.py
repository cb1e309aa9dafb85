"""
Color themes and the category-to-color lookup.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, List, Optional, Sequence

from ..core.tokens import Category, PatternCategory

CONSTANT_COLOR: Final[str] = '#AF52DE'


class Appearance(str, Enum):
    LIGHT = 'light'
    DARK = 'dark'


@dataclass(frozen=True)
class ThemeColor:
    """A color with separate values for light and dark appearance."""

    light: str
    dark: str

    def for_appearance(self, appearance: Appearance) -> str:
        return self.dark if appearance == Appearance.DARK else self.light


def _same(hex_color: str) -> ThemeColor:
    return ThemeColor(hex_color, hex_color)


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    background: ThemeColor
    foreground: ThemeColor
    selection: ThemeColor
    comment: ThemeColor
    keyword: ThemeColor
    string: ThemeColor
    number: ThemeColor
    function: ThemeColor
    variable: ThemeColor
    type: ThemeColor
    is_builtin: bool = True


def _theme(theme_id: str, name: str, *colors: str) -> Theme:
    # background, foreground, selection, comment, keyword, string, number, function, variable, type
    return Theme(theme_id, name, *(_same(color) for color in colors))


BUILTIN_THEMES: Final[Sequence[Theme]] = (
    _theme('xcode-light', 'Xcode Light', '#FFFFFF', '#000000', '#B3D7FF', '#007400', '#0033B3',
           '#C41A16', '#1750EB', '#00627A', '#000000', '#267F99'),
    _theme('xcode-dark', 'Xcode Dark', '#1F1F24', '#DEDEDE', '#264F78', '#6A9955', '#569CD6',
           '#CE9178', '#B5CEA8', '#DCDCAA', '#9CDCFE', '#4EC9B0'),
    _theme('vscode-dark', 'VS Code Dark+', '#1E1E1E', '#D4D4D4', '#264F78', '#6A9955', '#569CD6',
           '#CE9178', '#B5CEA8', '#DCDCAA', '#9CDCFE', '#4EC9B0'),
    _theme('vscode-light', 'VS Code Light+', '#FFFFFF', '#000000', '#ADD6FF', '#008000', '#0000FF',
           '#A31515', '#098658', '#795E26', '#001080', '#267F99'),
    _theme('monokai', 'Monokai', '#272822', '#F8F8F2', '#49483E', '#75715E', '#F92672',
           '#E6DB74', '#AE81FF', '#A6E22E', '#F8F8F2', '#66D9EF'),
    _theme('solarized-dark', 'Solarized Dark', '#002B36', '#839496', '#073642', '#586E75', '#859900',
           '#2AA198', '#D33682', '#268BD2', '#839496', '#B58900'),
    _theme('solarized-light', 'Solarized Light', '#FDF6E3', '#657B83', '#EEE8D5', '#93A1A1', '#859900',
           '#2AA198', '#D33682', '#268BD2', '#657B83', '#B58900'),
    _theme('github-dark', 'GitHub Dark', '#0D1117', '#C9D1D9', '#264F78', '#8B949E', '#FF7B72',
           '#A5D6FF', '#79C0FF', '#D2A8FF', '#C9D1D9', '#79C0FF'),
    _theme('github-light', 'GitHub Light', '#FFFFFF', '#24292F', '#B6E3FF', '#6E7781', '#CF222E',
           '#0A3069', '#0550AE', '#8250DF', '#953800', '#116329'),
)

DEFAULT_THEME_ID: Final[str] = 'xcode-light'

THEMED_CATEGORIES: Final[Sequence[str]] = ('comment', 'keyword', 'string', 'number', 'type')


class ThemeManager:
    """Holds the available themes and the current selection."""

    def __init__(self, themes: Optional[Sequence[Theme]] = None,
                 current_id: str = DEFAULT_THEME_ID) -> None:
        self._themes: Dict[str, Theme] = {theme.id: theme for theme in (themes or BUILTIN_THEMES)}
        if not self._themes:
            raise ValueError("At least one theme is required")

        self.current: Theme = self._themes.get(current_id) or next(iter(self._themes.values()))

    def themes(self) -> List[Theme]:
        return list(self._themes.values())

    def set_theme(self, theme_id: str) -> Theme:
        """
        Switch the current theme.

        Raises:
            KeyError: If no theme has that id
        """

        if theme_id not in self._themes:
            raise KeyError(theme_id)

        self.current = self._themes[theme_id]
        return self.current

    def color_for(self, category: Category, appearance: Appearance = Appearance.DARK) -> str:
        """
        Resolve the display color of a category.

        Comment, keyword, string, number and type come from the current
        theme. Constants always use a fixed accent color. Every other
        category is drawn in the theme's foreground color.

        Args:
            category: A scanner or pattern category
            appearance: Light or dark appearance

        Returns:
            A '#RRGGBB' color string
        """

        if category == PatternCategory.CONSTANT:
            return CONSTANT_COLOR

        name = category.value
        if name in THEMED_CATEGORIES:
            return getattr(self.current, name).for_appearance(appearance)

        return self.current.foreground.for_appearance(appearance)

    def foreground(self, appearance: Appearance = Appearance.DARK) -> str:
        return self.current.foreground.for_appearance(appearance)

    def background(self, appearance: Appearance = Appearance.DARK) -> str:
        return self.current.background.for_appearance(appearance)
