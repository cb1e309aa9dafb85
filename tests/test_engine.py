"""
Tests for SyntaxEngine classification and file resolution.
"""

import pytest

from synpad.core.engine import SyntaxEngine
from synpad.core.keywords import DEFAULT_KEYWORD_TABLE, KeywordTable
from synpad.core.modes import PatternRule, make_definition
from synpad.core.tokens import PatternCategory, Span, TokenCategory


def kinds(spans):
    return [(span.text, span.category) for span in spans]


@pytest.fixture
def engine(registry):
    return SyntaxEngine(DEFAULT_KEYWORD_TABLE, registry)


class TestClassifyLine:
    """Built-in languages use the scanner, definitions use the pattern rules."""

    def test_builtin_language(self, engine):
        assert kinds(engine.classify_line('def f(x):', 'python')) == [
            ('def', TokenCategory.KEYWORD), ('f', TokenCategory.IDENTIFIER), ('x', TokenCategory.IDENTIFIER),
        ]

    def test_alias_resolves_to_builtin(self, engine):
        assert engine.classify_line('import os', 'py')[0].category == TokenCategory.KEYWORD

    @pytest.mark.parametrize('language', [None, '', 'cobol'])
    def test_unknown_language_has_no_keywords(self, engine, language):
        assert kinds(engine.classify_line('let x = "s"', language)) == [
            ('let', TokenCategory.IDENTIFIER),
            ('x', TokenCategory.IDENTIFIER),
            ('=', TokenCategory.OPERATOR),
            ('"s"', TokenCategory.STRING),
        ]

    def test_keywords_depend_on_language(self, engine):
        assert engine.classify_line('func', 'swift')[0].category == TokenCategory.KEYWORD
        assert engine.classify_line('func', 'python')[0].category == TokenCategory.IDENTIFIER

    def test_custom_definition_uses_patterns(self, engine, log_mode):
        assert engine.classify_line('ERROR at 42', log_mode) == [
            Span('ERROR', PatternCategory.KEYWORD, 0, 5),
            Span('42', PatternCategory.NUMBER, 9, 11),
        ]

    def test_custom_definition_ignores_scanner_rules(self, engine, log_mode):
        assert engine.classify_line('"quoted" // note', log_mode) == []

    def test_invalid_rule_does_not_block_others(self, engine):
        mode = make_definition('Broken', ['brk'], [PatternRule('(', 'keyword'), PatternRule('x', 'type')])
        assert engine.classify_line('axb', mode) == [Span('x', PatternCategory.TYPE, 1, 2)]

    def test_max_line_length_applies_to_both_paths(self, registry, log_mode):
        engine = SyntaxEngine(DEFAULT_KEYWORD_TABLE, registry, max_line_length=4)
        assert kinds(engine.classify_line('abcdef', 'python')) == [('abcd', TokenCategory.IDENTIFIER)]
        assert engine.classify_line('12345', log_mode) == [Span('1234', PatternCategory.NUMBER, 0, 4)]

    def test_no_line_length_limit(self, registry):
        engine = SyntaxEngine(DEFAULT_KEYWORD_TABLE, registry, max_line_length=None)
        line = 'a' * 20_000
        assert engine.classify_line(line, 'python') == [Span(line, TokenCategory.IDENTIFIER, 0, 20_000)]

    def test_classify_text_splits_lines(self, engine):
        result = engine.classify_text('x\n"open\ny', 'swift')
        assert [kinds(spans) for spans in result] == [
            [('x', TokenCategory.IDENTIFIER)],
            [('"open', TokenCategory.STRING)],
            [('y', TokenCategory.IDENTIFIER)],
        ]

    def test_custom_keyword_table(self):
        engine = SyntaxEngine(KeywordTable({'toy': ['zap']}))
        assert engine.classify_line('zap', 'toy')[0].category == TokenCategory.KEYWORD
        assert engine.classify_line('def', 'python')[0].category == TokenCategory.IDENTIFIER


class TestResolve:
    """File name and content resolution."""

    @pytest.mark.parametrize('filename, expected', [
        ('main.py', 'python'),
        ('src/App.swift', 'swift'),
        ('index.js', 'javascript'),
        ('build.sh', 'shell'),
    ])
    def test_builtin_by_extension(self, engine, filename, expected):
        assert engine.resolve(filename) == expected

    def test_shebang_without_extension(self, engine):
        assert engine.resolve('deploy', '#!/usr/bin/env bash\necho hi') == 'shell'

    def test_python_shebang(self, engine):
        assert engine.resolve('tool', '#!/usr/bin/env python3\nprint(1)') == 'python'

    def test_content_heuristics(self, engine):
        assert engine.resolve('notes', 'import Foundation\n') == 'swift'

    def test_nothing_detected(self, engine):
        assert engine.resolve('notes.nothing', 'just some words') is None

    def test_custom_mode_by_extension(self, engine, registry, log_mode):
        registry.add(log_mode)
        assert engine.resolve('/var/log/app.LOG') == log_mode

    def test_custom_mode_takes_priority(self, engine, registry):
        mode = make_definition('My Python', ['py'])
        registry.add(mode)
        assert engine.resolve('main.py') == mode
        assert engine.detect_builtin('main.py') == 'python'

    def test_without_registry(self):
        assert SyntaxEngine().resolve('main.py') == 'python'
