"""
Ready-made pattern rule sets that can be installed as custom modes.
"""

from typing import Dict, Final, List, Optional, Sequence, Tuple

from .modes import CustomLanguageDefinition, PatternRule, make_definition

DOUBLE_QUOTED: Final[str] = r'"[^"\\]*(?:\\.[^"\\]*)*"'
SINGLE_QUOTED: Final[str] = r"'[^'\\]*(?:\\.[^'\\]*)*'"
BACKTICK_QUOTED: Final[str] = r'`[^`\\]*(?:\\.[^`\\]*)*`'
C_LINE_COMMENT: Final[str] = r'//.*'
C_BLOCK_COMMENT: Final[str] = r'/\*.*?\*/'
HASH_COMMENT: Final[str] = r'#.*'
MARKUP_COMMENT: Final[str] = r'<!--.*?-->'
INTEGER: Final[str] = r'\b[0-9]+\b'


def _words(*words: str) -> str:
    return r'\b(' + '|'.join(words) + r')\b'


Rules = Sequence[Tuple[str, str]]

PRESET_RULES: Final[Dict[str, Tuple[str, Tuple[str, ...], Rules]]] = {
    'swift': ('Swift', ('swift',), (
        (C_LINE_COMMENT, 'comment'),
        (C_BLOCK_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('let', 'var', 'func', 'class', 'struct', 'enum', 'protocol', 'if', 'else',
                'for', 'while', 'switch', 'case', 'default', 'return', 'break', 'continue',
                'guard', 'defer', 'throw', 'try', 'catch', 'finally', 'do', 'import',
                'public', 'private', 'internal', 'fileprivate', 'open', 'static', 'final',
                'override'), 'keyword'),
        (_words('true', 'false', 'nil'), 'constant'),
        (_words('Int', 'String', 'Double', 'Float', 'Bool', 'Array', 'Dictionary'), 'type'),
        (INTEGER, 'number'),
    )),
    'python': ('Python', ('py', 'python'), (
        (HASH_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('def', 'class', 'return', 'if', 'else', 'elif', 'for', 'while', 'try',
                'except', 'finally', 'raise', 'import', 'from', 'as', 'with', 'pass',
                'break', 'continue', 'global', 'nonlocal'), 'keyword'),
        (_words('True', 'False', 'None'), 'constant'),
        (INTEGER, 'number'),
    )),
    'javascript': ('JavaScript', ('js', 'jsx'), (
        (C_LINE_COMMENT, 'comment'),
        (C_BLOCK_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('let', 'const', 'var', 'function', 'return', 'if', 'else', 'for', 'while',
                'do', 'switch', 'case', 'default', 'break', 'continue', 'try', 'catch',
                'finally', 'throw', 'new', 'this', 'class', 'extends', 'import', 'export',
                'await', 'async'), 'keyword'),
        (_words('true', 'false', 'null', 'undefined'), 'constant'),
        (INTEGER, 'number'),
    )),
    'json': ('JSON', ('json',), (
        (DOUBLE_QUOTED, 'string'),
        (INTEGER, 'number'),
        (_words('null', 'true', 'false'), 'constant'),
    )),
    'html': ('HTML', ('html', 'htm'), (
        (MARKUP_COMMENT, 'comment'),
        (r'<[^>]*>', 'keyword'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('div', 'span', 'p', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'a', 'img', 'input',
                'button', 'form', 'table', 'tr', 'td', 'th', 'ul', 'ol', 'li', 'head',
                'body', 'title', 'meta', 'script', 'style', 'link'), 'type'),
    )),
    'css': ('CSS', ('css',), (
        (C_LINE_COMMENT, 'comment'),
        (C_BLOCK_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('color', 'background', 'font', 'margin', 'padding', 'border', 'display',
                'position', 'width', 'height', 'flex', 'grid'), 'keyword'),
        (r'#[a-fA-F0-9]{3,6}\b', 'constant'),
        (r'\b[0-9]+px\b|\b[0-9]+%|\b[0-9]+\b', 'number'),
    )),
    'typescript': ('TypeScript', ('ts', 'tsx'), (
        (C_LINE_COMMENT, 'comment'),
        (C_BLOCK_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (BACKTICK_QUOTED, 'string'),
        (_words('let', 'const', 'var', 'function', 'return', 'if', 'else', 'for', 'while',
                'do', 'switch', 'case', 'default', 'break', 'continue', 'try', 'catch',
                'finally', 'throw', 'new', 'this', 'class', 'extends', 'import', 'export',
                'await', 'async', 'interface', 'type', 'namespace', 'enum', 'public',
                'private', 'protected', 'readonly', 'static', 'abstract', 'implements'),
         'keyword'),
        (_words('true', 'false', 'null', 'undefined'), 'constant'),
        (_words('number', 'string', 'boolean', 'any', 'void', 'never', 'unknown', 'object',
                'Array', 'Promise'), 'type'),
        (INTEGER, 'number'),
    )),
    'markdown': ('Markdown', ('md', 'markdown', 'mdown', 'mkd'), (
        (r'^#{1,6}\s+.*', 'keyword'),
        (r'\*\*[^*]+\*\*', 'keyword'),
        (r'\*[^*]+\*', 'type'),
        (r'`[^`]+`', 'string'),
        (r'\[([^\]]+)\]\(([^)]+)\)', 'type'),
        (r'^\s*[-*+]\s+', 'keyword'),
        (r'^\s*\d+\.\s+', 'keyword'),
        (r'^>\s+.*', 'comment'),
    )),
    'yaml': ('YAML', ('yaml', 'yml'), (
        (HASH_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (r'^\s*[a-zA-Z_][a-zA-Z0-9_]*:', 'keyword'),
        (r'\b(true|false|null)\b|~', 'constant'),
        (INTEGER, 'number'),
        (r'^\s*-\s+', 'type'),
    )),
    'xml': ('XML', ('xml', 'xsd', 'xsl', 'xslt'), (
        (MARKUP_COMMENT, 'comment'),
        (r'<[^>]*>', 'keyword'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (_words('xml', 'version', 'encoding', 'standalone', 'xmlns'), 'type'),
    )),
    'shell': ('Shell Script', ('sh', 'bash', 'zsh', 'fish', 'csh', 'ksh'), (
        (HASH_COMMENT, 'comment'),
        (DOUBLE_QUOTED, 'string'),
        (SINGLE_QUOTED, 'string'),
        (r'\$[a-zA-Z_][a-zA-Z0-9_]*', 'type'),
        (r'\$\{[^}]+\}', 'type'),
        (_words('if', 'then', 'else', 'elif', 'fi', 'for', 'while', 'do', 'done', 'case',
                'esac', 'function', 'return', 'export', 'local', 'readonly', 'declare',
                'typeset', 'unset', 'alias', 'source'), 'keyword'),
        (_words('true', 'false'), 'constant'),
        (INTEGER, 'number'),
        (r'^\s*[a-zA-Z_][a-zA-Z0-9_]*\s*=', 'keyword'),
    )),
}

LINE_COMMENTS: Final[Dict[str, str]] = {
    'swift': '//', 'javascript': '//', 'typescript': '//', 'css': '//',
    'python': '#', 'shell': '#', 'yaml': '#',
}

BLOCK_COMMENTS: Final[Dict[str, Tuple[str, str]]] = {
    'swift': ('/*', '*/'), 'javascript': ('/*', '*/'), 'typescript': ('/*', '*/'),
    'css': ('/*', '*/'), 'html': ('<!--', '-->'), 'xml': ('<!--', '-->'),
}


def preset_names() -> List[str]:
    return sorted(PRESET_RULES)


def build_preset(key: str) -> Optional[CustomLanguageDefinition]:
    """
    Create a fresh custom definition from a preset.

    Each call returns a definition with a new id, so a preset can be
    installed, edited and installed again.

    Args:
        key: Preset name, e.g. 'yaml'

    Returns:
        The definition, or None if no preset has that name
    """

    key = key.strip().lower()
    preset = PRESET_RULES.get(key)
    if preset is None:
        return None

    name, extensions, rules = preset
    block_start, block_end = BLOCK_COMMENTS.get(key, ('', ''))

    return make_definition(
        name,
        extensions,
        [PatternRule(pattern, color_name) for pattern, color_name in rules],
        line_comment=LINE_COMMENTS.get(key, ''),
        block_comment_start=block_start,
        block_comment_end=block_end,
    )
