"""
Command line interface for synpad.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.engine import SyntaxEngine
from .core.errors import DefinitionError
from .core.keywords import DEFAULT_KEYWORD_TABLE
from .core.modes import CustomLanguageDefinition, make_definition, parse_pattern_argument
from .core.presets import build_preset, preset_names
from .core.registry import CustomModeRegistry
from .core.storage import JsonFileStore
from .ui.render import render
from .ui.theme import Appearance, ThemeManager
from .utils.config import Settings, configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""

    parser = argparse.ArgumentParser(
        prog='synpad',
        description="synpad - syntax classification for built-in languages and custom modes"
    )
    parser.add_argument('--modes-file', help="Custom mode store (default: $SYNPAD_MODES_PATH)")
    parser.add_argument('--theme', help="Theme id (default: $SYNPAD_THEME)")
    parser.add_argument('--appearance', choices=[a.value for a in Appearance], help="Light or dark colors")
    parser.add_argument('-v', '--verbose', action='count', default=0, help="More log output")

    commands = parser.add_subparsers(dest='command', required=True)

    show = commands.add_parser('show', help="Print a file with syntax colors")
    show.add_argument('file', help="File to show")
    show.add_argument('--language', help="Built-in language or custom mode name")
    show.add_argument('--format', dest='output_format', default='terminal256',
                      choices=['terminal256', 'truecolor', 'html'])

    tokens = commands.add_parser('tokens', help="List the classified spans of a file")
    tokens.add_argument('file', help="File to classify")
    tokens.add_argument('--language', help="Built-in language or custom mode name")

    commands.add_parser('languages', help="List built-in languages")
    commands.add_parser('themes', help="List themes")

    modes = commands.add_parser('modes', help="Manage custom modes")
    mode_commands = modes.add_subparsers(dest='mode_command', required=True)
    mode_commands.add_parser('list', help="List custom modes")
    mode_commands.add_parser('presets', help="List installable presets")

    mode_show = mode_commands.add_parser('show', help="Show a custom mode")
    mode_show.add_argument('name')

    mode_add = mode_commands.add_parser('add', help="Add a custom mode")
    mode_add.add_argument('--name', required=True)
    mode_add.add_argument('--ext', action='append', required=True, help="File extension (repeatable)")
    mode_add.add_argument('--keyword', action='append', default=[], help="Keyword (repeatable)")
    mode_add.add_argument('--line-comment', default='')
    mode_add.add_argument('--block-comment', nargs=2, metavar=('START', 'END'), default=('', ''))
    mode_add.add_argument('--pattern', action='append', default=[], metavar='REGEX=CATEGORY',
                          help="Pattern rule (repeatable)")

    mode_remove = mode_commands.add_parser('remove', help="Remove a custom mode")
    mode_remove.add_argument('name')

    mode_install = mode_commands.add_parser('install', help="Install a preset as a custom mode")
    mode_install.add_argument('preset')

    return parser


def _open_registry(settings: Settings) -> CustomModeRegistry:
    registry = CustomModeRegistry(JsonFileStore(settings.modes_path))
    error = registry.load()
    if error is not None:
        print(f"Warning: custom modes unavailable: {error}", file=sys.stderr)

    return registry


def _report_save(error: Optional[Exception]) -> None:
    if error is not None:
        print(f"Warning: custom modes not saved: {error}", file=sys.stderr)


def _read_lines(path: str) -> List[str]:
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read().splitlines()


def _resolve_language(engine: SyntaxEngine, registry: CustomModeRegistry,
                      path: str, lines: List[str], name: Optional[str]):
    if name:
        mode = registry.find_by_name(name)
        if mode is not None:
            return mode

        if not DEFAULT_KEYWORD_TABLE.is_builtin(name):
            logger.warning("Unknown language '%s'; no keywords will be highlighted", name)

        return name

    return engine.resolve(path, '\n'.join(lines[:100]))


def _describe(mode: CustomLanguageDefinition) -> str:
    extensions = ', '.join(mode.file_extensions) or '-'
    return f"{mode.name}\t{extensions}\t{len(mode.patterns)} patterns\t{mode.id}"


def run_modes(args: argparse.Namespace, registry: CustomModeRegistry) -> int:
    """Handle the `modes` sub-commands."""

    if args.mode_command == 'list':
        for mode in registry:
            print(_describe(mode))
        return 0

    if args.mode_command == 'presets':
        for name in preset_names():
            print(name)
        return 0

    if args.mode_command == 'install':
        definition = build_preset(args.preset)
        if definition is None:
            print(f"Unknown preset: {args.preset}", file=sys.stderr)
            return 1

        _report_save(registry.add(definition))
        print(_describe(definition))
        return 0

    if args.mode_command == 'add':
        try:
            patterns = [parse_pattern_argument(arg) for arg in args.pattern]
        except DefinitionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        definition = make_definition(
            args.name,
            args.ext,
            patterns,
            keywords=list(args.keyword),
            line_comment=args.line_comment,
            block_comment_start=args.block_comment[0],
            block_comment_end=args.block_comment[1],
        )
        _report_save(registry.add(definition))
        print(_describe(definition))
        return 0

    mode = registry.find_by_name(args.name)
    if mode is None:
        print(f"No custom mode named '{args.name}'", file=sys.stderr)
        return 1

    if args.mode_command == 'remove':
        _report_save(registry.delete(mode.id))
        return 0

    print(_describe(mode))
    for rule in mode.patterns:
        print(f"  {rule.color_name}\t{rule.pattern}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    level = settings.log_level
    if args.verbose == 1:
        level = 'INFO'
    elif args.verbose > 1:
        level = 'DEBUG'
    configure_logging(level)

    if args.modes_file:
        settings.modes_path = Path(args.modes_file).expanduser()
    if args.appearance:
        settings.appearance = Appearance(args.appearance)
    if args.theme:
        settings.theme = args.theme

    if args.command == 'languages':
        for name in DEFAULT_KEYWORD_TABLE.languages():
            aliases = [alias for alias, target in DEFAULT_KEYWORD_TABLE.aliases() if target == name]
            print(f"{name}\t{', '.join(aliases)}")
        return 0

    themes = ThemeManager()
    if args.command == 'themes':
        for theme in themes.themes():
            print(f"{theme.id}\t{theme.name}")
        return 0

    try:
        themes.set_theme(settings.theme)
    except KeyError:
        print(f"Unknown theme: {settings.theme}", file=sys.stderr)
        return 1

    registry = _open_registry(settings)
    if args.command == 'modes':
        return run_modes(args, registry)

    engine = SyntaxEngine(DEFAULT_KEYWORD_TABLE, registry, settings.max_line_length)

    try:
        lines = _read_lines(args.file)
    except OSError as e:
        print(f"Error reading {args.file}: {e}", file=sys.stderr)
        return 1

    language = _resolve_language(engine, registry, args.file, lines, args.language)
    spans = engine.classify_lines(lines, language)

    if args.command == 'tokens':
        for number, line_spans in enumerate(spans, start=1):
            for span in line_spans:
                print(f"{number}:{span.start}-{span.end}\t{span.category.value}\t{span.text}")
        return 0

    sys.stdout.write(render(lines, spans, themes, settings.appearance, args.output_format))
    return 0


if __name__ == '__main__':
    sys.exit(main())
