import logging
import os
from typing import Any
from uuid import uuid4

from .config import PipelineConfig, StorageConfig
from .errors import Conflict, InvalidInput, NotFound
from .queue import PROCESS_IMAGE_TASK
from .status import Status

logger = logging.getLogger(__name__)


class IntakeCoordinator:
    """
    Accepts a raw upload and turns it into a queued job.

    The raw object is written first, then the ``pending`` record, then the
    task. If a later step fails the earlier ones are undone, so callers never
    see a job without its asset or an asset without a job.
    """

    def __init__(self, object_store, status_store, task_queue, storage: StorageConfig, config: PipelineConfig):
        self.object_store = object_store
        self.status_store = status_store
        self.task_queue = task_queue
        self.storage = storage
        self.config = config

    def submit(self, filename: str | None, data: bytes | None) -> str:
        if not data:
            raise InvalidInput("No file uploaded or file is empty")

        job_id = str(uuid4())
        safe_name = os.path.basename(filename or "") or "upload"
        raw_key = f"{job_id}-{safe_name}"
        bucket = self.storage.raw_bucket

        self.object_store.put(bucket, raw_key, data)
        try:
            self.status_store.create(job_id)
        except Exception:
            self._discard_raw(bucket, raw_key)
            raise

        try:
            self.task_queue.enqueue(
                self.config.queue_name,
                PROCESS_IMAGE_TASK,
                {"jobId": job_id, "rawKey": raw_key},
            )
        except Exception:
            self._discard_status(job_id)
            self._discard_raw(bucket, raw_key)
            raise

        logger.info("accepted job_id=%s raw_key=%s size=%d", job_id, raw_key, len(data))
        return job_id

    def _discard_raw(self, bucket: str, raw_key: str) -> None:
        try:
            self.object_store.delete(bucket, raw_key)
        except Exception:
            logger.exception("could not remove raw object raw_key=%s", raw_key)

    def _discard_status(self, job_id: str) -> None:
        try:
            self.status_store.delete(job_id)
        except Exception:
            logger.exception("could not remove status record job_id=%s", job_id)


class QueryService:
    def __init__(self, status_store):
        self.status_store = status_store

    def _load(self, job_id: str):
        state = self.status_store.get(job_id)
        if state is None:
            raise NotFound(f"Job with ID {job_id} not found")
        return state

    def get_status(self, job_id: str) -> str:
        return self._load(job_id).status

    def get_result(self, job_id: str) -> dict[str, Any]:
        state = self._load(job_id)
        if state.status != Status.COMPLETED:
            raise Conflict(f"Job not completed. Current status: {state.status}")
        return {"status": state.status, "result": state.result}
