import logging

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .config import StorageConfig
from .errors import StorageFailure

logger = logging.getLogger(__name__)


def _make_client(config: StorageConfig, endpoint_url: str):
    session = boto3.session.Session(
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
    )
    return session.client(
        "s3",
        endpoint_url=endpoint_url,  # e.g. http://127.0.0.1:9000
        config=BotoConfig(
            s3={"addressing_style": "path"},
            signature_version="s3v4",
        ),
    )


class ObjectStore:
    """
    Bucket/key byte storage on S3 or MinIO.

    Holds two clients: one for server-side reads and writes, and one bound to
    the public endpoint so presigned URL hosts match what clients can reach.
    botocore errors are re-raised as StorageFailure.
    """

    def __init__(self, config: StorageConfig, client=None, presign_client=None):
        self.config = config
        self.client = client or _make_client(config, config.endpoint_url)
        self.presign_client = presign_client or _make_client(config, config.public_endpoint_url)

    def put(self, bucket: str, key: str, data: bytes, content_type: str | None = None) -> None:
        extra = {}
        if content_type:
            extra["ContentType"] = content_type
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=data, **extra)
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"Failed to upload s3://{bucket}/{key}: {e}") from e

    def get(self, bucket: str, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"Failed to download s3://{bucket}/{key}: {e}") from e

    def delete(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"Failed to delete s3://{bucket}/{key}: {e}") from e

    def presign(self, bucket: str, key: str, ttl: int) -> str:
        """
        Create a presigned GET URL to download an object.
        """
        try:
            return self.presign_client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=ttl,
                HttpMethod="GET",
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"Failed to presign s3://{bucket}/{key}: {e}") from e
