"""Shared fixtures: storage backends, a recording logger, loaded stores."""

import pytest

from tripbudget.audit import AuditLogger
from tripbudget.config import StorageSettings
from tripbudget.goals import GoalTracker
from tripbudget.ledger import LedgerStore
from tripbudget.services.storage import (
    KeyValueStore,
    LocalKeyValueStorage,
    SQLiteStorage,
    StorageError,
)


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.records = []

    def _record(self, level, event, **kwargs):
        self.records.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def event_types(self):
        return [kwargs["event_type"] for _, _, kwargs in self.records]


class FlakyKeyValueStore(KeyValueStore):
    """In-memory key-value store whose writes can be made to fail."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def _flush(self, data):
        if self.fail_writes:
            raise StorageError("disk full")
        super()._flush(data)


@pytest.fixture
def storage_settings():
    return StorageSettings(backend="local", local_path="")


@pytest.fixture
def memory_storage(storage_settings):
    return LocalKeyValueStorage(store=KeyValueStore(), settings=storage_settings)


@pytest.fixture
def file_storage(tmp_path, storage_settings):
    store = KeyValueStore(tmp_path / "budget.json")
    return LocalKeyValueStorage(store=store, settings=storage_settings)


@pytest.fixture
def sqlite_storage():
    storage = SQLiteStorage("sqlite://")
    yield storage
    storage.close()


@pytest.fixture(params=["local", "sqlite"])
def storage(request, storage_settings):
    """Each backend in turn, empty."""
    if request.param == "local":
        yield LocalKeyValueStorage(store=KeyValueStore(), settings=storage_settings)
    else:
        backend = SQLiteStorage("sqlite://")
        yield backend
        backend.close()


@pytest.fixture
def reopenable_storage(request, tmp_path, storage_settings):
    """
    Factory returning a fresh storage object over the same on-disk data.

    Parametrize indirectly with "local" or "sqlite".
    """
    kind = getattr(request, "param", "local")
    opened = []

    def _open():
        if kind == "local":
            backend = LocalKeyValueStorage(
                store=KeyValueStore(tmp_path / "budget.json"),
                settings=storage_settings,
            )
        else:
            backend = SQLiteStorage(f"sqlite:///{tmp_path / 'budget.db'}")
        opened.append(backend)
        return backend

    yield _open
    for backend in opened:
        backend.close()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def audit_logger(recording_logger):
    return AuditLogger(recording_logger)


@pytest.fixture
def ledger(storage, audit_logger):
    return LedgerStore.open(storage, audit_logger)


@pytest.fixture
def tracker(storage, audit_logger):
    return GoalTracker.open(storage, audit_logger)


@pytest.fixture
def flaky_store():
    return FlakyKeyValueStore()
