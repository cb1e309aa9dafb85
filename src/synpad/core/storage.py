"""
Durable key/value storage for editor state such as custom modes.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import StorageError

logger = logging.getLogger(__name__)


class MemoryStore:
    """Keeps values in process memory. Values are copied through JSON on the way in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.write(key, value)

    def read(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None

        return json.loads(raw)

    def write(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for '{key}' is not serializable: {exc}", operation='write') from exc


class JsonFileStore:
    """
    Stores keys of one JSON object in a single file.

    Every write rewrites the whole file through a temporary file in the same
    directory followed by an atomic rename, so readers never see a partial
    document.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            text = self.path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(str(exc), path=str(self.path), operation='read') from exc

        if not text.strip():
            return {}

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON: {exc}", path=str(self.path), operation='read') from exc

        if not isinstance(document, dict):
            raise StorageError("Top level of the store must be an object", path=str(self.path), operation='read')

        return document

    def read(self, key: str) -> Optional[Any]:
        """
        Read one key.

        Returns:
            The stored value, or None when the file or key does not exist

        Raises:
            StorageError: If the file cannot be read or parsed
        """

        return self._read_document().get(key)

    def write(self, key: str, value: Any) -> None:
        """
        Replace one key, keeping the other keys of the file.

        Raises:
            StorageError: If the file cannot be written
        """

        try:
            document = self._read_document()
        except StorageError:
            logger.warning("Overwriting unreadable store %s", self.path)
            document = {}

        document[key] = value

        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for '{key}' is not serializable: {exc}",
                               path=str(self.path), operation='write') from exc

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.write('\n')
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StorageError(str(exc), path=str(self.path), operation='write') from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

        logger.debug("Wrote key '%s' to %s", key, self.path)
