"""
Tests for the custom mode registry.
"""

import logging
import threading
import uuid

import pytest

from synpad.core.errors import StorageError
from synpad.core.modes import PatternRule, make_definition
from synpad.core.registry import SCHEMA_VERSION, STORAGE_KEY, CustomModeRegistry

from .conftest import FailingStore


class TestResolveExtension:
    """Extension lookup returns the first matching definition."""

    def test_first_registered_wins(self, registry):
        first = make_definition('Server log', ['log'])
        second = make_definition('App log', ['txt', 'log'])
        registry.add(first)
        registry.add(second)

        assert registry.resolve_extension('log') == first
        assert registry.resolve_extension('txt') == second

    @pytest.mark.parametrize('ext', ['LOG', '.log', 'Log'])
    def test_case_insensitive(self, registry, log_mode, ext):
        registry.add(log_mode)
        assert registry.resolve_extension(ext) == log_mode

    def test_no_match(self, registry, log_mode):
        registry.add(log_mode)
        assert registry.resolve_extension('py') is None
        assert registry.resolve_extension('') is None


class TestMutations:
    """add / update / delete each persist the whole sequence."""

    def test_add_appends_and_saves(self, registry, store, log_mode):
        assert registry.add(log_mode) is None
        assert registry.definitions() == (log_mode,)
        assert store.writes == 1
        assert store.read(STORAGE_KEY)['modes'][0]['name'] == 'Log'

    def test_duplicate_names_and_extensions_are_allowed(self, registry, log_mode):
        registry.add(log_mode)
        registry.add(make_definition('Log', ['log']))
        assert len(registry) == 2

    def test_duplicate_id_is_rejected(self, registry, log_mode):
        registry.add(log_mode)
        with pytest.raises(ValueError):
            registry.add(log_mode.with_changes(name='Other'))

    def test_update_replaces_in_place(self, registry, log_mode):
        other = make_definition('Other', ['oth'])
        registry.add(log_mode)
        registry.add(other)

        renamed = log_mode.with_changes(name='Renamed')
        assert registry.update(renamed) is None
        assert registry.definitions() == (renamed, other)

    def test_update_unknown_is_noop(self, registry, store, log_mode):
        assert registry.update(log_mode) is None
        assert len(registry) == 0
        assert store.writes == 0

    def test_delete(self, registry, store, log_mode):
        registry.add(log_mode)
        assert registry.delete(log_mode.id) is None
        assert len(registry) == 0
        assert store.writes == 2

    def test_delete_unknown_is_noop(self, registry, store, log_mode):
        registry.add(log_mode)
        registry.delete(uuid.uuid4())
        assert registry.definitions() == (log_mode,)
        assert store.writes == 1

    def test_lookups(self, registry, log_mode):
        registry.add(log_mode)
        assert registry.get(log_mode.id) == log_mode
        assert registry.get(uuid.uuid4()) is None
        assert registry.find_by_name('LOG') == log_mode
        assert registry.find_by_name('nope') is None
        assert list(registry) == [log_mode]


class TestPersistence:
    """Saving and loading through the store."""

    def test_round_trip_after_mutations(self, registry, store, log_mode):
        keep = make_definition('Keep', ['k'], [PatternRule('x', 'glitter')], keywords=['a', 'b'])
        gone = make_definition('Gone', ['g'])
        registry.add(log_mode)
        registry.add(keep)
        registry.add(gone)
        registry.update(log_mode.with_changes(line_comment='#'))
        registry.delete(gone.id)

        reloaded = CustomModeRegistry(store)
        assert reloaded.load() is None
        assert reloaded.definitions() == registry.definitions()
        assert reloaded.definitions()[0].line_comment == '#'
        assert reloaded.definitions()[1].patterns[0].color_name == 'glitter'

    def test_payload_carries_schema_version(self, registry, store, log_mode):
        registry.add(log_mode)
        assert store.read(STORAGE_KEY)['schemaVersion'] == SCHEMA_VERSION

    def test_empty_store_loads_empty(self, store):
        reg = CustomModeRegistry(store)
        assert reg.load() is None
        assert len(reg) == 0

    def test_legacy_list_payload(self, store, log_mode):
        store.write(STORAGE_KEY, [log_mode.to_dict()])
        reg = CustomModeRegistry(store)
        assert reg.load() is None
        assert reg.definitions() == (log_mode,)

    def test_bad_records_are_skipped(self, store, log_mode, caplog):
        store.write(STORAGE_KEY, {'schemaVersion': 1, 'modes': [
            {'name': ''}, log_mode.to_dict(), log_mode.to_dict(),
        ]})
        reg = CustomModeRegistry(store)
        with caplog.at_level(logging.WARNING, logger='synpad.core.registry'):
            assert reg.load() is None

        assert reg.definitions() == (log_mode,)
        assert 'Skipping custom mode record 0' in caplog.text
        assert 'duplicate id' in caplog.text

    def test_newer_schema_version_fails_load(self, store):
        store.write(STORAGE_KEY, {'schemaVersion': SCHEMA_VERSION + 1, 'modes': []})
        reg = CustomModeRegistry(store)
        assert isinstance(reg.load(), StorageError)
        assert len(reg) == 0

    def test_custom_storage_key(self, store, log_mode):
        reg = CustomModeRegistry(store, storage_key='other')
        reg.add(log_mode)
        assert store.read('other') is not None
        assert store.read(STORAGE_KEY) is None


class TestStorageFailures:
    """Persistence failures are returned and logged, never raised."""

    def test_failed_load_leaves_registry_empty(self, caplog):
        reg = CustomModeRegistry(FailingStore())
        with caplog.at_level(logging.ERROR, logger='synpad.core.registry'):
            error = reg.load()

        assert isinstance(error, StorageError)
        assert error.operation == 'read'
        assert reg.last_error is error
        assert len(reg) == 0
        assert 'Failed to load custom modes' in caplog.text

    def test_failed_save_keeps_memory(self, log_mode):
        reg = CustomModeRegistry(FailingStore(fail_read=False))
        reg.load()

        error = reg.add(log_mode)
        assert isinstance(error, StorageError)
        assert error.operation == 'write'
        assert reg.definitions() == (log_mode,)
        assert reg.resolve_extension('log') == log_mode

    def test_successful_save_clears_last_error(self, store, log_mode):
        reg = CustomModeRegistry(store)
        reg.last_error = StorageError('old')
        reg.add(log_mode)
        assert reg.last_error is None


class TestConcurrency:
    """Mutations from several threads are applied one at a time."""

    def test_parallel_adds(self, registry, store):
        def worker(prefix):
            for i in range(25):
                registry.add(make_definition(f'{prefix}-{i}', [prefix]))

        threads = [threading.Thread(target=worker, args=(f't{n}',)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 200
        assert len(store.read(STORAGE_KEY)['modes']) == 200
        assert store.writes == 200
