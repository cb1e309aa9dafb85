"""
UI package for presenting classified text.

This package holds the color themes, the category-to-color lookup, and the
pygments-based renderer used by the command line interface.
"""

from .render import build_style, render
from .theme import Appearance, Theme, ThemeColor, ThemeManager

__all__ = ['build_style', 'render', 'Appearance', 'Theme', 'ThemeColor', 'ThemeManager']
