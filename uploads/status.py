from dataclasses import dataclass
from typing import Any

from .models import JobRecord

Status = JobRecord.Status


@dataclass(frozen=True)
class JobState:
    status: str
    result: dict[str, Any] | None = None


class StatusStore:
    """
    Job status map keyed by job id, persisted through the Django ORM.

    Writes are last-write-wins. A result is only kept for terminal states;
    writing a non-terminal status clears it.
    """

    def create(self, job_id: str) -> None:
        JobRecord.objects.create(id=job_id, status=Status.PENDING)

    def set(self, job_id: str, status: str, result: dict[str, Any] | None = None) -> None:
        status = Status(status)
        if status not in JobRecord.TERMINAL:
            if result is not None:
                raise ValueError(f"Result is only stored for terminal states, not {status.value!r}")
        JobRecord.objects.update_or_create(id=job_id, defaults={"status": status, "result": result})

    def get(self, job_id: str) -> JobState | None:
        record = JobRecord.objects.filter(pk=job_id).only("status", "result").first()
        if record is None:
            return None
        return JobState(status=str(record.status), result=record.result)

    def delete(self, job_id: str) -> None:
        JobRecord.objects.filter(pk=job_id).delete()
