"""
Reserved word sets for the built-in languages.
"""

from types import MappingProxyType
from typing import Dict, Final, FrozenSet, Iterable, List, Mapping, Optional, Tuple

SWIFT_KEYWORDS: Final[FrozenSet[str]] = frozenset({
    'let', 'var', 'func', 'class', 'struct', 'enum', 'protocol', 'extension',
    'if', 'else', 'for', 'in', 'while', 'repeat', 'switch', 'case', 'default',
    'return', 'break', 'continue', 'guard', 'defer', 'throw', 'throws',
    'try', 'catch', 'do', 'import', 'init', 'deinit', 'self', 'Self',
    'public', 'private', 'internal', 'fileprivate', 'open', 'static',
    'final', 'override', 'mutating', 'inout', 'where', 'as', 'is',
    'true', 'false', 'nil',
})

PYTHON_KEYWORDS: Final[FrozenSet[str]] = frozenset({
    'def', 'class', 'return', 'if', 'else', 'elif', 'for', 'in', 'while',
    'try', 'except', 'finally', 'raise', 'import', 'from', 'as', 'with',
    'pass', 'break', 'continue', 'global', 'nonlocal', 'lambda', 'yield',
    'async', 'await', 'and', 'or', 'not', 'is', 'del', 'assert',
    'True', 'False', 'None',
})

JAVASCRIPT_KEYWORDS: Final[FrozenSet[str]] = frozenset({
    'let', 'const', 'var', 'function', 'return', 'if', 'else', 'for',
    'while', 'do', 'switch', 'case', 'default', 'break', 'continue', 'try',
    'catch', 'finally', 'throw', 'new', 'this', 'class', 'extends', 'super',
    'import', 'export', 'await', 'async', 'typeof', 'instanceof', 'in', 'of',
    'delete', 'void', 'yield', 'true', 'false', 'null', 'undefined',
})

TYPESCRIPT_KEYWORDS: Final[FrozenSet[str]] = JAVASCRIPT_KEYWORDS | frozenset({
    'interface', 'type', 'namespace', 'enum', 'public', 'private',
    'protected', 'readonly', 'static', 'abstract', 'implements', 'declare',
    'keyof', 'as',
})

SHELL_KEYWORDS: Final[FrozenSet[str]] = frozenset({
    'if', 'then', 'else', 'elif', 'fi', 'for', 'while', 'until', 'do',
    'done', 'case', 'esac', 'in', 'function', 'return', 'export', 'local',
    'readonly', 'declare', 'typeset', 'unset', 'alias', 'source',
})

BUILTIN_KEYWORDS: Final[Mapping[str, FrozenSet[str]]] = MappingProxyType({
    'swift': SWIFT_KEYWORDS,
    'python': PYTHON_KEYWORDS,
    'javascript': JAVASCRIPT_KEYWORDS,
    'typescript': TYPESCRIPT_KEYWORDS,
    'shell': SHELL_KEYWORDS,
})

LANGUAGE_ALIASES: Final[Mapping[str, str]] = MappingProxyType({
    'py': 'python',
    'python3': 'python',
    'js': 'javascript',
    'jsx': 'javascript',
    'ts': 'typescript',
    'tsx': 'typescript',
    'sh': 'shell',
    'bash': 'shell',
    'zsh': 'shell',
})


class KeywordTable:
    """Case-insensitive lookup of reserved words by language name."""

    def __init__(self, languages: Optional[Mapping[str, Iterable[str]]] = None,
                 aliases: Optional[Mapping[str, str]] = None) -> None:
        if languages is None:
            languages = BUILTIN_KEYWORDS
        if aliases is None:
            aliases = LANGUAGE_ALIASES

        table: Dict[str, FrozenSet[str]] = {
            name.lower(): frozenset(words) for name, words in languages.items()
        }
        self._table: Mapping[str, FrozenSet[str]] = MappingProxyType(table)
        self._aliases: Mapping[str, str] = MappingProxyType({
            alias.lower(): target.lower() for alias, target in aliases.items()
            if target.lower() in table
        })

    def canonical_name(self, language: str) -> Optional[str]:
        """Resolve a language name or alias to its canonical table name."""

        if not language:
            return None

        name = language.strip().lower()
        if name in self._table:
            return name

        return self._aliases.get(name)

    def is_builtin(self, language: str) -> bool:
        return self.canonical_name(language) is not None

    def keywords_for(self, language: str) -> FrozenSet[str]:
        """
        Get the reserved words of a language.

        Args:
            language: Language name or alias, any case

        Returns:
            The keyword set, or an empty set for unknown languages
        """

        name = self.canonical_name(language)
        if name is None:
            return frozenset()

        return self._table[name]

    def languages(self) -> List[str]:
        return sorted(self._table)

    def aliases(self) -> List[Tuple[str, str]]:
        return sorted(self._aliases.items())


DEFAULT_KEYWORD_TABLE: Final[KeywordTable] = KeywordTable()
