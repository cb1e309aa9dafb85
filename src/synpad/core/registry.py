"""
Registry of custom language definitions.

The registry holds definitions in registration order and writes the whole
sequence back to its store after every change. Changes and the write that
follows them run under one lock, so concurrent mutations from several
threads are applied one at a time.
"""

import logging
import threading
from typing import Any, Callable, Iterator, List, Optional, Protocol, Tuple
from uuid import UUID

from .errors import DefinitionError, StorageError
from .modes import CustomLanguageDefinition, normalize_extension

logger = logging.getLogger(__name__)

STORAGE_KEY = 'customSyntaxModes'
SCHEMA_VERSION = 1


class ModeStore(Protocol):
    def read(self, key: str) -> Optional[Any]: ...

    def write(self, key: str, value: Any) -> None: ...


def encode_modes(modes: List[CustomLanguageDefinition]) -> dict:
    return {
        'schemaVersion': SCHEMA_VERSION,
        'modes': [mode.to_dict() for mode in modes],
    }


def decode_modes(payload: Any) -> List[CustomLanguageDefinition]:
    """
    Decode a stored payload into definitions.

    A bare list of records, as written before the payload carried a schema
    version, is accepted. Records that fail to decode are skipped.

    Raises:
        StorageError: If the payload has an unsupported shape or version
    """

    if isinstance(payload, list):
        records = payload
    elif isinstance(payload, dict):
        version = payload.get('schemaVersion', SCHEMA_VERSION)
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise StorageError(f"Unsupported custom mode schema version {version!r}")

        records = payload.get('modes', [])
        if not isinstance(records, list):
            raise StorageError("Custom mode payload 'modes' must be a list")
    else:
        raise StorageError(f"Unexpected custom mode payload of type {type(payload).__name__}")

    modes = []
    seen = set()
    for index, record in enumerate(records):
        try:
            mode = CustomLanguageDefinition.from_dict(record)
        except DefinitionError as exc:
            logger.warning("Skipping custom mode record %d: %s", index, exc)
            continue

        if mode.id in seen:
            logger.warning("Skipping custom mode record %d: duplicate id %s", index, mode.id)
            continue

        seen.add(mode.id)
        modes.append(mode)

    return modes


class CustomModeRegistry:
    """Ordered, persisted collection of custom language definitions."""

    def __init__(self, store: ModeStore, storage_key: str = STORAGE_KEY) -> None:
        self.store = store
        self.storage_key = storage_key
        self._modes: List[CustomLanguageDefinition] = []
        self._lock = threading.RLock()
        self.last_error: Optional[StorageError] = None
        self._listeners: List[Callable[[UUID], None]] = []

    def add_listener(self, callback: Callable[[UUID], None]) -> None:
        """Call `callback(mode_id)` after a definition is updated or deleted."""

        with self._lock:
            self._listeners.append(callback)

    def _notify(self, mode_id: UUID) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for callback in listeners:
            callback(mode_id)

    def load(self) -> Optional[StorageError]:
        """
        Replace the in-memory definitions with the stored ones.

        A failure leaves the registry empty; the error is logged and returned
        rather than raised so the editor keeps working without custom modes.

        Returns:
            None on success, otherwise the StorageError that occurred
        """

        with self._lock:
            try:
                payload = self.store.read(self.storage_key)
                modes = [] if payload is None else decode_modes(payload)
            except StorageError as exc:
                logger.error("Failed to load custom modes: %s", exc)
                self._modes = []
                self.last_error = exc
                return exc

            self._modes = modes
            self.last_error = None
            logger.debug("Loaded %d custom modes", len(modes))

            return None

    def save(self) -> Optional[StorageError]:
        """
        Write every definition to the store.

        Returns:
            None on success, otherwise the StorageError that occurred; the
            in-memory definitions are kept either way
        """

        with self._lock:
            try:
                self.store.write(self.storage_key, encode_modes(self._modes))
            except StorageError as exc:
                logger.error("Failed to save custom modes: %s", exc)
                self.last_error = exc
                return exc

            self.last_error = None
            return None

    def add(self, definition: CustomLanguageDefinition) -> Optional[StorageError]:
        """
        Append a definition and save.

        Names and extensions may repeat; only the id must be new.

        Raises:
            ValueError: If a definition with the same id is registered
        """

        with self._lock:
            if self._index_of(definition.id) is not None:
                raise ValueError(f"Custom mode {definition.id} is already registered")

            self._modes.append(definition)
            logger.info("Added custom mode '%s'", definition.name)

            return self.save()

    def update(self, definition: CustomLanguageDefinition) -> Optional[StorageError]:
        """Replace the definition with the same id and save. Unknown ids are ignored."""

        with self._lock:
            index = self._index_of(definition.id)
            if index is None:
                logger.debug("Ignoring update of unknown custom mode %s", definition.id)
                return None

            self._modes[index] = definition
            logger.info("Updated custom mode '%s'", definition.name)

            error = self.save()

        self._notify(definition.id)
        return error

    def delete(self, mode_id: UUID) -> Optional[StorageError]:
        """Remove the definition with the given id and save. Unknown ids are ignored."""

        with self._lock:
            index = self._index_of(mode_id)
            if index is None:
                logger.debug("Ignoring delete of unknown custom mode %s", mode_id)
                return None

            removed = self._modes.pop(index)
            logger.info("Deleted custom mode '%s'", removed.name)

            error = self.save()

        self._notify(mode_id)
        return error

    def resolve_extension(self, extension: str) -> Optional[CustomLanguageDefinition]:
        """
        Find the definition for a file extension.

        Args:
            extension: Extension with or without a leading dot, any case

        Returns:
            The first registered definition listing the extension, or None
        """

        wanted = normalize_extension(extension)
        if not wanted:
            return None

        for mode in self.definitions():
            if mode.handles_extension(wanted):
                return mode

        return None

    def get(self, mode_id: UUID) -> Optional[CustomLanguageDefinition]:
        with self._lock:
            index = self._index_of(mode_id)
            return None if index is None else self._modes[index]

    def find_by_name(self, name: str) -> Optional[CustomLanguageDefinition]:
        wanted = name.strip().lower()
        for mode in self.definitions():
            if mode.name.lower() == wanted:
                return mode

        return None

    def definitions(self) -> Tuple[CustomLanguageDefinition, ...]:
        with self._lock:
            return tuple(self._modes)

    def _index_of(self, mode_id: UUID) -> Optional[int]:
        for index, mode in enumerate(self._modes):
            if mode.id == mode_id:
                return index

        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._modes)

    def __iter__(self) -> Iterator[CustomLanguageDefinition]:
        return iter(self.definitions())
