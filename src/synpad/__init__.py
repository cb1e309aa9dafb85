"""
synpad: line-oriented syntax classification for a text editor.
"""

__version__ = '0.1.0'
