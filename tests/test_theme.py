"""
Tests for themes and the category-to-color lookup.
"""

import pytest

from synpad.core.tokens import PatternCategory, TokenCategory
from synpad.ui.theme import (
    BUILTIN_THEMES, CONSTANT_COLOR, DEFAULT_THEME_ID, Appearance, Theme, ThemeColor, ThemeManager,
)


def test_builtin_theme_ids_are_unique():
    ids = [theme.id for theme in BUILTIN_THEMES]
    assert len(ids) == len(set(ids)) == 9
    assert DEFAULT_THEME_ID in ids


def test_theme_color_appearance():
    color = ThemeColor('#111111', '#EEEEEE')
    assert color.for_appearance(Appearance.LIGHT) == '#111111'
    assert color.for_appearance(Appearance.DARK) == '#EEEEEE'


class TestColorFor:
    """color_for routes categories to theme attributes."""

    @pytest.fixture
    def themes(self):
        return ThemeManager()

    @pytest.mark.parametrize('category, expected', [
        (PatternCategory.KEYWORD, '#0033B3'),
        (PatternCategory.STRING, '#C41A16'),
        (PatternCategory.COMMENT, '#007400'),
        (PatternCategory.NUMBER, '#1750EB'),
        (PatternCategory.TYPE, '#267F99'),
        (TokenCategory.KEYWORD, '#0033B3'),
        (TokenCategory.STRING, '#C41A16'),
    ])
    def test_themed_categories(self, themes, category, expected):
        assert themes.color_for(category) == expected

    def test_constant_uses_accent_color(self, themes):
        assert themes.color_for(PatternCategory.CONSTANT) == CONSTANT_COLOR
        themes.set_theme('monokai')
        assert themes.color_for(PatternCategory.CONSTANT) == CONSTANT_COLOR

    @pytest.mark.parametrize('category', [
        PatternCategory.UNKNOWN, TokenCategory.IDENTIFIER, TokenCategory.OPERATOR, TokenCategory.PLAIN,
    ])
    def test_other_categories_use_foreground(self, themes, category):
        assert themes.color_for(category) == themes.foreground() == '#000000'

    def test_follows_current_theme(self, themes):
        themes.set_theme('monokai')
        assert themes.color_for(PatternCategory.KEYWORD) == '#F92672'
        assert themes.background() == '#272822'

    def test_uses_appearance(self):
        theme = Theme(
            'split', 'Split',
            *(ThemeColor(f'#0000{i:02d}', f'#FFFF{i:02d}') for i in range(10)),
            is_builtin=False,
        )
        themes = ThemeManager([theme], 'split')
        assert themes.color_for(PatternCategory.KEYWORD, Appearance.LIGHT) == '#000004'
        assert themes.color_for(PatternCategory.KEYWORD, Appearance.DARK) == '#FFFF04'


class TestThemeManager:
    def test_unknown_theme(self):
        themes = ThemeManager()
        with pytest.raises(KeyError):
            themes.set_theme('no-such-theme')
        assert themes.current.id == DEFAULT_THEME_ID

    def test_unknown_initial_theme_falls_back(self):
        assert ThemeManager(current_id='missing').current.id == BUILTIN_THEMES[0].id

    def test_lists_all_themes(self):
        assert [theme.id for theme in ThemeManager().themes()] == [theme.id for theme in BUILTIN_THEMES]
