from dataclasses import dataclass
from functools import lru_cache

from .config import PipelineConfig, StorageConfig
from .pipeline import TransformationWorker
from .queue import TaskQueue
from .s3 import ObjectStore
from .services import IntakeCoordinator, QueryService
from .status import StatusStore


@dataclass
class Services:
    intake: IntakeCoordinator
    query: QueryService
    worker: TransformationWorker


def build_services(object_store, status_store, task_queue, storage: StorageConfig, config: PipelineConfig) -> Services:
    return Services(
        intake=IntakeCoordinator(object_store, status_store, task_queue, storage, config),
        query=QueryService(status_store),
        worker=TransformationWorker(object_store, status_store, storage, config),
    )


@lru_cache(maxsize=None)
def get_services() -> Services:
    """Process-wide components, built once from Django settings on first use."""
    from image_pipeline.celery import celery_app

    storage = StorageConfig.from_settings()
    return build_services(
        object_store=ObjectStore(storage),
        status_store=StatusStore(),
        task_queue=TaskQueue(celery_app),
        storage=storage,
        config=PipelineConfig.from_settings(),
    )
