"""
Settings read from the environment.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from ..core.scanner import DEFAULT_MAX_LINE_LENGTH
from ..ui.theme import DEFAULT_THEME_ID, Appearance

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


def _default_home() -> Path:
    return Path.home() / '.synpad'


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default

    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default

    return value


def _appearance_setting(env: Mapping[str, str], name: str, default: Appearance) -> Appearance:
    raw = env.get(name)
    if not raw:
        return default

    try:
        return Appearance(raw.strip().lower())
    except ValueError:
        logger.warning("Ignoring %s=%r: expected 'light' or 'dark'", name, raw)
        return default


@dataclass
class Settings:
    """Runtime settings; every field can be overridden with a SYNPAD_* variable."""

    home: Path = field(default_factory=_default_home)
    modes_path: Optional[Path] = None
    theme: str = DEFAULT_THEME_ID
    appearance: Appearance = Appearance.DARK
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    log_level: str = 'WARNING'

    def __post_init__(self) -> None:
        if self.modes_path is None:
            self.modes_path = self.home / 'custom_modes.json'

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Recognized variables: SYNPAD_HOME, SYNPAD_MODES_PATH, SYNPAD_THEME,
        SYNPAD_APPEARANCE, SYNPAD_MAX_LINE_LENGTH, SYNPAD_LOG_LEVEL. Invalid
        values are ignored with a warning.
        """

        if env is None:
            env = os.environ

        home = Path(env['SYNPAD_HOME']).expanduser() if env.get('SYNPAD_HOME') else _default_home()
        modes_path = Path(env['SYNPAD_MODES_PATH']).expanduser() if env.get('SYNPAD_MODES_PATH') else None

        return cls(
            home=home,
            modes_path=modes_path,
            theme=env.get('SYNPAD_THEME') or DEFAULT_THEME_ID,
            appearance=_appearance_setting(env, 'SYNPAD_APPEARANCE', Appearance.DARK),
            max_line_length=_int_setting(env, 'SYNPAD_MAX_LINE_LENGTH', DEFAULT_MAX_LINE_LENGTH),
            log_level=(env.get('SYNPAD_LOG_LEVEL') or 'WARNING').upper(),
        )


def configure_logging(level: str = 'WARNING') -> None:
    """Send log records to stderr at the given level name."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr)
