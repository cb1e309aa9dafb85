"""
Shared fixtures for synpad tests.
"""

from typing import Any, Optional

import pytest

from synpad.core.errors import StorageError
from synpad.core.modes import PatternRule, make_definition
from synpad.core.registry import CustomModeRegistry
from synpad.core.storage import MemoryStore


class RecordingStore(MemoryStore):
    """MemoryStore that counts writes."""

    def __init__(self) -> None:
        super().__init__()
        self.writes = 0

    def write(self, key: str, value: Any) -> None:
        self.writes += 1
        super().write(key, value)


class FailingStore:
    """Store whose reads and/or writes always fail."""

    def __init__(self, fail_read: bool = True, fail_write: bool = True) -> None:
        self.fail_read = fail_read
        self.fail_write = fail_write

    def read(self, key: str) -> Optional[Any]:
        if self.fail_read:
            raise StorageError("disk unavailable", path='/nowhere', operation='read')
        return None

    def write(self, key: str, value: Any) -> None:
        if self.fail_write:
            raise StorageError("disk full", path='/nowhere', operation='write')


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def registry(store):
    reg = CustomModeRegistry(store)
    assert reg.load() is None
    return reg


@pytest.fixture
def log_mode():
    return make_definition(
        'Log',
        ['log'],
        [PatternRule(r'\b(ERROR|WARN)\b', 'keyword'), PatternRule(r'\d+', 'number')],
    )
