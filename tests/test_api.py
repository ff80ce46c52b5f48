import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from uploads.models import JobRecord

pytestmark = pytest.mark.django_db


@pytest.fixture()
def client(services, monkeypatch) -> APIClient:
    monkeypatch.setattr("uploads.views.get_services", lambda: services)
    return APIClient()


def _upload(client, name="cat.png", data=b"", content_type="image/png"):
    return client.post("/upload", {"file": SimpleUploadedFile(name, data, content_type=content_type)}, format="multipart")


def test_upload_returns_created_job_id(client, png_bytes):
    r = _upload(client, data=png_bytes)

    assert r.status_code == 201
    job_id = r.json()["jobId"]

    r = client.get(f"/upload/{job_id}/status")
    assert r.status_code == 200
    assert r.json() == {"status": "pending"}


def test_empty_upload_is_rejected(client, task_queue):
    r = _upload(client, data=b"")

    assert r.status_code == 400
    assert JobRecord.objects.count() == 0
    assert task_queue.tasks == []


def test_missing_file_field_is_rejected(client):
    r = client.post("/upload", {}, format="multipart")

    assert r.status_code == 400
    assert JobRecord.objects.count() == 0


def test_unknown_job_is_404(client):
    r = client.get("/upload/nonexistent-id/status")
    assert r.status_code == 404
    assert "nonexistent-id" in r.json()["detail"]

    r = client.get("/upload/nonexistent-id/result")
    assert r.status_code == 404


def test_result_before_completion_is_409(client, png_bytes):
    job_id = _upload(client, data=png_bytes).json()["jobId"]

    r = client.get(f"/upload/{job_id}/result")

    assert r.status_code == 409
    assert r.json()["detail"]


def test_result_after_processing(client, run_queued, png_bytes):
    job_id = _upload(client, data=png_bytes).json()["jobId"]
    run_queued()

    r = client.get(f"/upload/{job_id}/status")
    assert r.json() == {"status": "completed"}

    r = client.get(f"/upload/{job_id}/result")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "completed"
    processed_url, thumbnail_url = body["result"]["urls"]
    assert f"{job_id}-cat-processed.jpg" in processed_url
    assert f"{job_id}-cat-thumbnail.jpg" in thumbnail_url


def test_health_check(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_oversized_upload_is_rejected(client, task_queue, settings, png_bytes):
    settings.PIPELINE_MAX_UPLOAD_SIZE = len(png_bytes) - 1

    r = _upload(client, data=png_bytes)

    assert r.status_code == 400
    assert "too large" in r.json()["file"][0]
    assert JobRecord.objects.count() == 0
    assert task_queue.tasks == []
