from django.db import models


class JobRecord(models.Model):
    """Status record for one submitted job, keyed by the job id."""

    class Status(models.TextChoices):
        PENDING = "pending"
        PROCESSING = "processing"
        COMPLETED = "completed"
        FAILED = "failed"

    TERMINAL = {Status.COMPLETED, Status.FAILED}

    id = models.CharField(primary_key=True, max_length=64, editable=False)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    # {"urls": [...]} when completed, {"error": "..."} when failed
    result = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.id} ({self.status})"
