import logging
import os
from typing import Any, Callable

from . import imaging
from .config import PipelineConfig, StorageConfig
from .errors import EmptyAsset, UnknownTask
from .queue import PROCESS_IMAGE_TASK
from .status import Status

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 4000


def derivative_keys(raw_key: str) -> tuple[str, str]:
    """Output keys for the processed image and the thumbnail of ``raw_key``."""
    base_name, _ = os.path.splitext(raw_key)
    return f"{base_name}-processed.jpg", f"{base_name}-thumbnail.jpg"


class TransformationWorker:
    """
    Runs one delivery attempt of a queued task.

    Every failure after the job is marked processing is written to the status
    store as ``failed`` and then re-raised, so the queue decides whether the
    task is delivered again.
    """

    def __init__(self, object_store, status_store, storage: StorageConfig, config: PipelineConfig):
        self.object_store = object_store
        self.status_store = status_store
        self.storage = storage
        self.config = config
        self._handlers: dict[str, Callable[[dict[str, Any]], None]] = {
            PROCESS_IMAGE_TASK: self.process_image,
        }

    def handle(self, task_name: str, payload: dict[str, Any]) -> None:
        try:
            handler = self._handlers[task_name]
        except KeyError:
            raise UnknownTask(f"Unknown task name: {task_name}") from None
        handler(payload)

    def process_image(self, payload: dict[str, Any]) -> None:
        job_id = payload["jobId"]
        raw_key = payload["rawKey"]

        self.status_store.set(job_id, Status.PROCESSING)
        logger.info("processing job_id=%s raw_key=%s", job_id, raw_key)

        try:
            urls = self._run(raw_key)
        except Exception as e:
            logger.exception("job failed job_id=%s raw_key=%s", job_id, raw_key)
            message = str(e) or type(e).__name__
            self.status_store.set(job_id, Status.FAILED, {"error": message[:MAX_ERROR_LENGTH]})
            raise

        self.status_store.set(job_id, Status.COMPLETED, {"urls": urls})
        logger.info("completed job_id=%s", job_id)

    def _run(self, raw_key: str) -> list[str]:
        raw = self.object_store.get(self.storage.raw_bucket, raw_key)
        if not raw:
            raise EmptyAsset(f"Downloaded file is empty: {raw_key}")

        processed_key, thumbnail_key = derivative_keys(raw_key)
        quality = self.config.jpeg_quality

        processed = imaging.fit_inside(raw, self.config.processed_size, quality)
        thumbnail = imaging.cover_crop(raw, self.config.thumbnail_size, quality)

        bucket = self.storage.processed_bucket
        self.object_store.put(bucket, processed_key, processed, content_type="image/jpeg")
        self.object_store.put(bucket, thumbnail_key, thumbnail, content_type="image/jpeg")

        ttl = self.config.presign_ttl
        return [
            self.object_store.presign(bucket, processed_key, ttl),
            self.object_store.presign(bucket, thumbnail_key, ttl),
        ]
