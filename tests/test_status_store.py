import pytest

from uploads.models import JobRecord

pytestmark = pytest.mark.django_db


def test_created_record_is_pending_without_result(status_store):
    status_store.create("job-1")

    state = status_store.get("job-1")
    assert state.status == "pending"
    assert state.result is None


def test_missing_record_reads_as_none(status_store):
    assert status_store.get("never-created") is None


def test_later_write_wins(status_store):
    status_store.create("job-1")
    status_store.set("job-1", "completed", {"urls": ["a", "b"]})
    status_store.set("job-1", "processing")

    state = status_store.get("job-1")
    assert state.status == "processing"
    assert state.result is None

    status_store.set("job-1", "failed", {"error": "boom"})
    assert status_store.get("job-1").result == {"error": "boom"}
    assert JobRecord.objects.count() == 1


def test_result_is_refused_for_non_terminal_status(status_store):
    status_store.create("job-1")

    with pytest.raises(ValueError):
        status_store.set("job-1", "processing", {"urls": []})

    assert status_store.get("job-1").status == "pending"


def test_unknown_status_value_is_refused(status_store):
    with pytest.raises(ValueError):
        status_store.set("job-1", "complete")


def test_delete_removes_record(status_store):
    status_store.create("job-1")
    status_store.delete("job-1")

    assert status_store.get("job-1") is None
