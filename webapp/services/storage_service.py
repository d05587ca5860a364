"""Blob store for image payloads, backed by S3."""
import logging
import time
from typing import Protocol

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from webapp.errors import BlobStoreError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class S3BlobStore:
    """Put/delete of opaque payloads in a single bucket."""

    def __init__(self, client, bucket):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_config(cls, config):
        client = boto3.client(
            "s3",
            endpoint_url=config["S3_ENDPOINT_URL"] or None,
            aws_access_key_id=config["S3_ACCESS_KEY"] or None,
            aws_secret_access_key=config["S3_SECRET_KEY"] or None,
            region_name=config["AWS_REGION"],
            config=BotoConfig(signature_version="s3v4"),
        )
        return cls(client, config["S3_BUCKET_NAME"])

    def put(self, key, data, content_type="image/jpeg"):
        """Upload bytes under ``key``."""
        started = time.perf_counter()
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload of %s failed: %s", key, e)
            raise BlobStoreError(f"upload of {key} failed") from e
        logger.info(
            "S3 upload of %s executed in %.2fms",
            key,
            (time.perf_counter() - started) * 1000,
        )

    def delete(self, key):
        """Delete the object stored under ``key``."""
        started = time.perf_counter()
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 delete of %s failed: %s", key, e)
            raise BlobStoreError(f"delete of {key} failed") from e
        logger.info(
            "S3 delete of %s executed in %.2fms",
            key,
            (time.perf_counter() - started) * 1000,
        )
