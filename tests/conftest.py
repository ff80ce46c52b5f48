import pytest

from uploads.bootstrap import build_services
from uploads.config import PipelineConfig, StorageConfig
from uploads.errors import StorageFailure
from uploads.status import StatusStore

from tests._images import make_image


class InMemoryObjectStore:
    """Object store double; ``fail(op, exc)`` makes the next calls to ``op`` raise."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.calls: list[tuple[str, str, str]] = []
        self._failures: dict[str, Exception] = {}

    def fail(self, op: str, exc: Exception) -> None:
        self._failures[op] = exc

    def recover(self, op: str) -> None:
        self._failures.pop(op, None)

    def _check(self, op: str, bucket: str, key: str) -> None:
        self.calls.append((op, bucket, key))
        if op in self._failures:
            raise self._failures[op]

    def put(self, bucket, key, data, content_type=None):
        self._check("put", bucket, key)
        self.objects[(bucket, key)] = bytes(data)

    def get(self, bucket, key):
        self._check("get", bucket, key)
        try:
            return self.objects[(bucket, key)]
        except KeyError:
            raise StorageFailure(f"NoSuchKey s3://{bucket}/{key}") from None

    def delete(self, bucket, key):
        self._check("delete", bucket, key)
        self.objects.pop((bucket, key), None)

    def presign(self, bucket, key, ttl):
        self._check("presign", bucket, key)
        return f"https://s3.test/{bucket}/{key}?X-Amz-Expires={ttl}"


class RecordingQueue:
    def __init__(self):
        self.tasks: list[tuple[str, str, dict]] = []
        self.error: Exception | None = None

    def enqueue(self, queue_name, task_name, payload):
        if self.error is not None:
            raise self.error
        self.tasks.append((queue_name, task_name, dict(payload)))
        return f"task-{len(self.tasks)}"


@pytest.fixture()
def storage_config() -> StorageConfig:
    return StorageConfig(
        endpoint_url="http://127.0.0.1:9000",
        public_endpoint_url="http://cdn.test:9000",
        region="us-east-1",
        access_key="test",
        secret_key="test",
        raw_bucket="raw-images",
        processed_bucket="processed-images",
    )


@pytest.fixture()
def pipeline_config() -> PipelineConfig:
    return PipelineConfig()


@pytest.fixture()
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture()
def task_queue() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture()
def status_store(db) -> StatusStore:
    return StatusStore()


@pytest.fixture()
def services(object_store, status_store, task_queue, storage_config, pipeline_config):
    return build_services(object_store, status_store, task_queue, storage_config, pipeline_config)


@pytest.fixture()
def png_bytes() -> bytes:
    return make_image()


@pytest.fixture()
def run_queued(services, task_queue):
    """Deliver every queued task to the worker once, like a queue drain."""

    def _run():
        for _queue_name, task_name, payload in list(task_queue.tasks):
            services.worker.handle(task_name, payload)

    return _run
