"""
Custom language definitions authored by the user.

A definition is recognized by file extension and classified with regular
expression rules instead of the character scanner.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import DefinitionError
from .tokens import PatternCategory


@dataclass(frozen=True)
class PatternRule:
    """A regular expression tagged with the category its matches get."""

    pattern: str
    color_name: str
    category: PatternCategory = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'category', PatternCategory.parse(self.color_name))

    def to_dict(self) -> Dict[str, str]:
        return {'pattern': self.pattern, 'colorName': self.color_name}

    @classmethod
    def from_dict(cls, data: Any) -> 'PatternRule':
        if not isinstance(data, dict):
            raise DefinitionError(f"Pattern rule must be an object, got {type(data).__name__}")

        pattern = data.get('pattern')
        color_name = data.get('colorName', '')
        if not isinstance(pattern, str) or not isinstance(color_name, str):
            raise DefinitionError("Pattern rule needs string 'pattern' and 'colorName' fields")

        return cls(pattern, color_name)


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DefinitionError(f"Field '{key}' must be a list of strings")

    return list(value)


def _string(data: Dict[str, Any], key: str) -> str:
    value = data.get(key, '')
    if not isinstance(value, str):
        raise DefinitionError(f"Field '{key}' must be a string")

    return value


@dataclass(frozen=True)
class CustomLanguageDefinition:
    """
    A user-defined language.

    Only `id` identifies a definition. Names, extensions and patterns may
    repeat across definitions; extension lookup takes the first match in
    registry order. The comment delimiters and keyword list are stored for
    the user's reference and are not used by the pattern matcher.
    """

    name: str
    file_extensions: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    line_comment: str = ''
    block_comment_start: str = ''
    block_comment_end: str = ''
    patterns: Tuple[PatternRule, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'file_extensions', tuple(self.file_extensions))
        object.__setattr__(self, 'keywords', tuple(self.keywords))
        object.__setattr__(self, 'patterns', tuple(self.patterns))

    def handles_extension(self, extension: str) -> bool:
        """Check whether the definition claims a file extension (case-insensitive)."""

        wanted = normalize_extension(extension)
        return any(normalize_extension(ext) == wanted for ext in self.file_extensions)

    def with_changes(self, **changes: Any) -> 'CustomLanguageDefinition':
        """Copy of this definition with some fields replaced; the id is kept."""

        changes.pop('id', None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'name': self.name,
            'fileExtensions': list(self.file_extensions),
            'keywords': list(self.keywords),
            'lineComment': self.line_comment,
            'blockCommentStart': self.block_comment_start,
            'blockCommentEnd': self.block_comment_end,
            'syntaxPatterns': [rule.to_dict() for rule in self.patterns],
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'CustomLanguageDefinition':
        """
        Build a definition from its persisted form.

        Args:
            data: A record as written by `to_dict`

        Returns:
            The decoded definition; a record without an id gets a new one

        Raises:
            DefinitionError: If the record is malformed
        """

        if not isinstance(data, dict):
            raise DefinitionError(f"Definition must be an object, got {type(data).__name__}")

        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            raise DefinitionError("Definition needs a non-empty 'name'")

        raw_id = data.get('id')
        if raw_id is None:
            mode_id = uuid.uuid4()
        else:
            try:
                mode_id = uuid.UUID(str(raw_id))
            except ValueError as exc:
                raise DefinitionError(f"Invalid definition id {raw_id!r}") from exc

        raw_patterns = data.get('syntaxPatterns', [])
        if not isinstance(raw_patterns, list):
            raise DefinitionError("Field 'syntaxPatterns' must be a list")

        return cls(
            id=mode_id,
            name=name,
            file_extensions=_string_list(data, 'fileExtensions'),
            keywords=_string_list(data, 'keywords'),
            line_comment=_string(data, 'lineComment'),
            block_comment_start=_string(data, 'blockCommentStart'),
            block_comment_end=_string(data, 'blockCommentEnd'),
            patterns=tuple(PatternRule.from_dict(item) for item in raw_patterns),
        )


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and drop a leading dot."""

    return extension.strip().lstrip('.').lower()


def parse_pattern_argument(argument: str) -> PatternRule:
    """
    Parse a `REGEX=CATEGORY` command line argument.

    The category is taken after the last '=' so the pattern itself may
    contain '='.
    """

    pattern, sep, color_name = argument.rpartition('=')
    if not sep or not pattern:
        raise DefinitionError(f"Expected REGEX=CATEGORY, got {argument!r}")

    return PatternRule(pattern, color_name)


def make_definition(name: str, extensions: Sequence[str],
                    patterns: Optional[Sequence[PatternRule]] = None,
                    **fields: Any) -> CustomLanguageDefinition:
    return CustomLanguageDefinition(
        name=name,
        file_extensions=tuple(normalize_extension(ext) for ext in extensions),
        patterns=tuple(patterns or ()),
        **fields,
    )
