import logging
from typing import Any

from celery import Celery

logger = logging.getLogger(__name__)

PROCESS_IMAGE_TASK = "process-image"


class TaskQueue:
    """Enqueues named tasks on a named Celery queue. Delivery, retries and backoff belong to Celery."""

    def __init__(self, app: Celery):
        self.app = app

    def enqueue(self, queue_name: str, task_name: str, payload: dict[str, Any]) -> str:
        result = self.app.send_task(task_name, kwargs=payload, queue=queue_name)
        logger.info("enqueued task=%s queue=%s task_id=%s", task_name, queue_name, result.id)
        return result.id
