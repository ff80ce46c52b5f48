import logging

from celery import shared_task

from .bootstrap import get_services
from .errors import UnknownTask
from .queue import PROCESS_IMAGE_TASK

logger = logging.getLogger(__name__)


@shared_task(bind=True, name=PROCESS_IMAGE_TASK)
def process_image(self, **payload):
    """
    Queue entry point for ``process-image``; payload is ``{jobId, rawKey}``.

    The worker records the failure on the job before raising; this task only
    hands the error back to Celery with an exponential countdown. Once
    ``max_retries`` is spent Celery re-raises the last error and the job
    stays ``failed``.
    """
    worker = get_services().worker
    try:
        worker.handle(self.name, payload)
    except UnknownTask:
        raise
    except Exception as exc:
        config = worker.config
        countdown = config.retry_countdown(self.request.retries)
        logger.warning(
            "attempt failed job_id=%s attempt=%d max_retries=%d retry_in=%ds error=%s",
            payload.get("jobId"),
            self.request.retries + 1,
            config.max_retries,
            countdown,
            exc,
        )
        raise self.retry(exc=exc, countdown=countdown, max_retries=config.max_retries)
