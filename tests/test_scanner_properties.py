"""
Property-based tests for the line scanner.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from synpad.core.keywords import DEFAULT_KEYWORD_TABLE
from synpad.core.scanner import scan
from synpad.core.tokens import Span, TokenCategory

# Characters that exercise every scanner rule: words, numbers, strings,
# escapes, operators, comments, punctuation and whitespace.
line_chars = st.sampled_from(list('abcxyz_ABC019.+-*/=!<>&|%^~"\\ \t(){};,#\'é'))
lines = st.text(line_chars, max_size=80)
languages = st.sampled_from(DEFAULT_KEYWORD_TABLE.languages() + ['unknown'])


@settings(max_examples=300)
@given(line=lines, language=languages)
def test_spans_are_ordered_and_disjoint(line, language):
    spans = scan(line, DEFAULT_KEYWORD_TABLE.keywords_for(language))

    previous_end = 0
    for span in spans:
        assert previous_end <= span.start < span.end <= len(line)
        previous_end = span.end


@settings(max_examples=300)
@given(line=lines, language=languages)
def test_span_text_matches_offsets(line, language):
    spans = scan(line, DEFAULT_KEYWORD_TABLE.keywords_for(language))

    for span in spans:
        assert span.text == line[span.start:span.end]
    assert sum(len(span.text) for span in spans) <= len(line)


@given(line=lines, language=languages)
def test_scan_is_deterministic(line, language):
    keywords = DEFAULT_KEYWORD_TABLE.keywords_for(language)
    assert scan(line, keywords) == scan(line, keywords)


@given(line=lines)
def test_gaps_hold_only_whitespace_or_single_skipped_characters(line):
    spans = scan(line, frozenset())

    pos = 0
    for span in spans + [Span('', TokenCategory.PLAIN, len(line), len(line))]:
        for char in line[pos:span.start]:
            assert char.isspace() or char in '(){};,#\'\\'
        pos = span.end


@st.composite
def language_and_keyword(draw):
    language = draw(st.sampled_from(DEFAULT_KEYWORD_TABLE.languages()))
    keywords = DEFAULT_KEYWORD_TABLE.keywords_for(language)
    word = draw(st.sampled_from(sorted(w for w in keywords if w.isidentifier())))
    return language, word


@given(pair=language_and_keyword())
def test_lone_keyword_is_single_keyword_span(pair):
    language, word = pair
    spans = scan(word, DEFAULT_KEYWORD_TABLE.keywords_for(language))
    assert spans == [Span(word, TokenCategory.KEYWORD, 0, len(word))]


@given(line=lines, limit=st.integers(min_value=0, max_value=100))
def test_max_length_never_exceeded(line, limit):
    spans = scan(line, frozenset(), max_length=limit)
    assert all(span.end <= limit for span in spans)
