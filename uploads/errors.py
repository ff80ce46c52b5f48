import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base class for every error raised by the image job pipeline."""

    status_code = 500


class InvalidInput(PipelineError):
    status_code = 400


class NotFound(PipelineError):
    status_code = 404


class Conflict(PipelineError):
    status_code = 409


class PipelineStepError(PipelineError):
    """A data-dependent failure inside the worker; recorded on the job and retried by the queue."""


class EmptyAsset(PipelineStepError):
    pass


class TransformFailure(PipelineStepError):
    pass


class StorageFailure(PipelineStepError):
    pass


class UnknownTask(PipelineError):
    """The queue delivered a task name nobody handles. A defect, never retried."""


def api_exception_handler(exc, context):
    """
    Render pipeline errors as DRF-style ``{"detail": ...}`` bodies.
    Anything else goes through DRF's default handler.
    """
    if isinstance(exc, PipelineError) and exc.status_code < 500:
        return Response({"detail": str(exc)}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("unhandled_error view=%s", type(view).__name__ if view else None, exc_info=exc)
    return response
