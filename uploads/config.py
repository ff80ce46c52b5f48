from dataclasses import dataclass

from django.conf import settings as django_settings


@dataclass(frozen=True)
class StorageConfig:
    endpoint_url: str
    public_endpoint_url: str
    region: str
    access_key: str | None
    secret_key: str | None
    raw_bucket: str
    processed_bucket: str

    @classmethod
    def from_settings(cls, settings=django_settings) -> "StorageConfig":
        return cls(
            endpoint_url=settings.S3_ENDPOINT_URL,
            public_endpoint_url=settings.S3_PUBLIC_ENDPOINT,
            region=settings.S3_REGION,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            raw_bucket=settings.RAW_BUCKET,
            processed_bucket=settings.PROCESSED_BUCKET,
        )


@dataclass(frozen=True)
class PipelineConfig:
    queue_name: str = "image-processing"
    presign_ttl: int = 604800
    processed_size: tuple[int, int] = (800, 600)
    thumbnail_size: tuple[int, int] = (150, 150)
    jpeg_quality: int = 85
    max_retries: int = 3
    retry_backoff: int = 5
    retry_backoff_max: int = 600

    @classmethod
    def from_settings(cls, settings=django_settings) -> "PipelineConfig":
        return cls(
            queue_name=settings.PIPELINE_QUEUE_NAME,
            presign_ttl=settings.PIPELINE_PRESIGN_TTL,
            processed_size=tuple(settings.PIPELINE_PROCESSED_SIZE),
            thumbnail_size=tuple(settings.PIPELINE_THUMBNAIL_SIZE),
            jpeg_quality=settings.PIPELINE_JPEG_QUALITY,
            max_retries=settings.PIPELINE_TASK_MAX_RETRIES,
            retry_backoff=settings.PIPELINE_TASK_RETRY_BACKOFF,
            retry_backoff_max=settings.PIPELINE_TASK_RETRY_BACKOFF_MAX,
        )

    def retry_countdown(self, retries: int) -> int:
        """Exponential backoff in seconds before redelivery number ``retries + 1``."""
        return min(self.retry_backoff * (2 ** retries), self.retry_backoff_max)
