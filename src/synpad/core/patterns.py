"""
Regular expression classification for custom language definitions.

Every rule of a definition is matched against the line independently, so
matches may overlap. Overlaps are settled by `flatten`, which paints the
matches onto the line in the order `classify` returns them: the rule that
comes later in the definition wins any character it shares with an earlier
rule.
"""

import logging
import re
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union
from uuid import UUID

from .modes import CustomLanguageDefinition, PatternRule
from .tokens import PatternCategory, Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternMatch:
    """One match of one rule within a line."""

    rule_index: int
    pattern: str
    category: PatternCategory
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class InvalidRule:
    rule_index: int
    pattern: str
    error: str


@dataclass(frozen=True)
class CompiledDefinition:
    """A definition whose rules have been compiled once."""

    definition: CustomLanguageDefinition
    rules: Tuple[Tuple[int, PatternRule, re.Pattern], ...]
    invalid_rules: Tuple[InvalidRule, ...]


def compile_definition(definition: CustomLanguageDefinition) -> CompiledDefinition:
    """
    Compile the pattern rules of a definition.

    A rule whose pattern is not a valid regular expression, or one the
    regex parser cannot handle (a repeat count too large, nesting too
    deep), is left out and reported with a warning. The remaining rules
    still apply.

    Args:
        definition: The custom language definition

    Returns:
        The compiled rules together with the rules that failed to compile
    """

    rules = []
    invalid = []

    for index, rule in enumerate(definition.patterns):
        try:
            rules.append((index, rule, re.compile(rule.pattern)))
        except (re.error, OverflowError, RecursionError) as exc:
            logger.warning(
                "Skipping invalid pattern %r (rule %d) in mode '%s': %s",
                rule.pattern, index, definition.name, exc
            )
            invalid.append(InvalidRule(index, rule.pattern, str(exc)))

    return CompiledDefinition(definition, tuple(rules), tuple(invalid))


def classify(line: str, definition: Union[CustomLanguageDefinition, CompiledDefinition]) -> List[PatternMatch]:
    """
    Find every match of every rule in a line.

    Args:
        line: The text of a single line
        definition: A definition, or one already compiled

    Returns:
        Non-empty matches ordered by rule, then by position within the rule
    """

    if isinstance(definition, CustomLanguageDefinition):
        definition = compile_definition(definition)

    matches: List[PatternMatch] = []
    for index, rule, regex in definition.rules:
        for match in regex.finditer(line):
            start, end = match.span()
            if start == end:
                continue

            matches.append(PatternMatch(index, rule.pattern, rule.category, start, end, match.group(0)))

    return matches


def flatten(line: str, matches: Sequence[PatternMatch]) -> List[Span]:
    """
    Resolve overlapping matches into ordered, non-overlapping spans.

    Matches are applied in sequence and each one overwrites whatever an
    earlier one claimed, so the last match covering a character decides its
    category. Characters no match covers produce no span.

    Args:
        line: The line the matches were found in
        matches: Matches in application order, as returned by `classify`

    Returns:
        Spans in increasing offset order
    """

    owners: List[Optional[int]] = [None] * len(line)
    for order, match in enumerate(matches):
        for pos in range(match.start, min(match.end, len(line))):
            owners[pos] = order

    spans: List[Span] = []
    pos = 0
    while pos < len(owners):
        owner = owners[pos]
        if owner is None:
            pos += 1
            continue

        end = pos + 1
        while end < len(owners) and owners[end] == owner:
            end += 1

        spans.append(Span(line[pos:end], matches[owner].category, pos, end))
        pos = end

    return spans


class PatternMatcher:
    """Classifies lines for custom definitions, compiling each definition once."""

    def __init__(self) -> None:
        self._cache: Dict[UUID, CompiledDefinition] = {}
        self._lock = threading.Lock()

    def compiled(self, definition: CustomLanguageDefinition) -> CompiledDefinition:
        """Get the compiled form of a definition, recompiling when it has changed."""

        with self._lock:
            cached = self._cache.get(definition.id)
            if cached is not None and cached.definition == definition:
                return cached

            compiled = compile_definition(definition)
            self._cache[definition.id] = compiled

            return compiled

    def invalidate(self, mode_id: Optional[UUID] = None) -> None:
        with self._lock:
            if mode_id is None:
                self._cache.clear()
            else:
                self._cache.pop(mode_id, None)

    def __contains__(self, mode_id: object) -> bool:
        with self._lock:
            return mode_id in self._cache

    def classify(self, line: str, definition: CustomLanguageDefinition) -> List[PatternMatch]:
        return classify(line, self.compiled(definition))

    def spans(self, line: str, definition: CustomLanguageDefinition) -> List[Span]:
        return flatten(line, self.classify(line, definition))
