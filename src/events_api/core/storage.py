"""S3-compatible object storage for profile images.

boto3 is blocking, so every call is pushed to a worker thread with
asyncio.to_thread to keep the event loop free.
"""

import asyncio
from collections.abc import Iterator
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.events_api.core.config import Settings
from src.events_api.core.logging import get_logger

logger = get_logger(__name__)

_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class BlobStoreError(RuntimeError):
    """Raised when the object store can't complete a read or write."""


class BlobStore:
    """Thin async wrapper over a single bucket."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlobStore":
        client = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint or None,
            aws_access_key_id=settings.s3_access_key_id or None,
            aws_secret_access_key=settings.s3_secret_access_key or None,
            region_name=settings.s3_region,
            config=Config(
                connect_timeout=settings.s3_timeout_seconds,
                read_timeout=settings.s3_timeout_seconds,
                retries={"max_attempts": 2},
            ),
        )
        return cls(client, settings.s3_bucket)

    async def put(self, key: str, data: bytes, content_type: str = "image/jpeg") -> None:
        """Store an object, replacing any existing one under the same key."""
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Object upload failed", key=key, error=str(e))
            raise BlobStoreError(f"Failed to store {key}") from e

    async def open(self, key: str, chunk_size: int = 64 * 1024) -> Iterator[bytes] | None:
        """Start reading an object as a chunk iterator.

        Returns None when nothing is stored under the key. Iterating the
        result blocks, so hand it to something that runs it in a thread
        (StreamingResponse does this for sync iterators).
        """
        try:
            response = await asyncio.to_thread(
                self._client.get_object, Bucket=self._bucket, Key=key
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES:
                return None
            logger.error("Object download failed", key=key, error=str(e))
            raise BlobStoreError(f"Failed to read {key}") from e
        except BotoCoreError as e:
            logger.error("Object download failed", key=key, error=str(e))
            raise BlobStoreError(f"Failed to read {key}") from e
        return response["Body"].iter_chunks(chunk_size)  # type: ignore[no-any-return]
