import json

import pytest

from jobboard.db.seed import DEMO_JOBS
from jobboard.db.store import APPLICATIONS_KEY, JOBS_KEY, NOTIFICATIONS_KEY, MemoryStore
from jobboard.errors import StorageCorruptionError
from jobboard.types import Application, Job, Notification


def test_initialize_defaults_seeds_jobs_and_empty_applications() -> None:
    store = MemoryStore()
    seeded = store.initialize_defaults()

    assert seeded == [JOBS_KEY, APPLICATIONS_KEY]
    jobs = store.read_collection(JOBS_KEY, Job)
    assert [job.id for job in jobs] == [item["id"] for item in DEMO_JOBS]
    assert store.read_collection(APPLICATIONS_KEY, Application) == []


def test_initialize_defaults_is_idempotent() -> None:
    store = MemoryStore()
    store.initialize_defaults()
    first = store.read_collection(JOBS_KEY, Job)

    for _ in range(3):
        assert store.initialize_defaults() == []

    assert store.read_collection(JOBS_KEY, Job) == first
    assert store.read_collection(APPLICATIONS_KEY, Application) == []


def test_initialize_defaults_keeps_existing_jobs() -> None:
    store = MemoryStore({JOBS_KEY: "[]"})
    assert store.initialize_defaults() == [APPLICATIONS_KEY]
    assert store.read_collection(JOBS_KEY, Job) == []


def test_absent_collection_reads_as_empty() -> None:
    assert MemoryStore().read_collection(NOTIFICATIONS_KEY, Notification) == []


def test_collections_are_stored_with_camel_case_keys() -> None:
    store = MemoryStore()
    store.initialize_defaults()
    raw = json.loads(store._load_raw(JOBS_KEY))
    assert "applicantCount" in raw[0]
    assert "postedBy" in raw[0]


def test_malformed_json_raises_storage_corruption() -> None:
    store = MemoryStore({JOBS_KEY: "{not json"})
    with pytest.raises(StorageCorruptionError) as exc_info:
        store.read_collection(JOBS_KEY, Job)
    assert exc_info.value.key == JOBS_KEY


def test_schema_mismatch_raises_storage_corruption() -> None:
    store = MemoryStore({JOBS_KEY: json.dumps([{"id": "1"}])})
    with pytest.raises(StorageCorruptionError):
        store.read_collection(JOBS_KEY, Job)


def test_reset_to_defaults_recovers_corrupt_collection() -> None:
    store = MemoryStore({JOBS_KEY: "garbage", APPLICATIONS_KEY: "[]"})
    store.reset_to_defaults([JOBS_KEY])
    assert len(store.read_collection(JOBS_KEY, Job)) == len(DEMO_JOBS)


def test_transaction_discards_writes_on_error() -> None:
    store = MemoryStore()
    store.initialize_defaults()

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.write_collection(JOBS_KEY, [])
            assert store.read_collection(JOBS_KEY, Job) == []
            raise RuntimeError("boom")

    assert len(store.read_collection(JOBS_KEY, Job)) == len(DEMO_JOBS)


def test_nested_transactions_commit_once_with_outer_block() -> None:
    store = MemoryStore()
    with store.transaction():
        with store.transaction():
            store.write_collection(JOBS_KEY, [])
        assert store._load_raw(JOBS_KEY) is None
    assert store._load_raw(JOBS_KEY) == "[]"
