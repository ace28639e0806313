"""
S3-backed content store.

Stores raw uploads in the document bucket under content-addressed keys.

Dependencies: boto3
System role: Production content store
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from funding_docs.boundary.storage.base import ContentStore
from funding_docs.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3ContentStore(ContentStore):
    """Content store backed by an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-northeast-1",
        prefix: str = "documents",
        client=None,
    ) -> None:
        """
        Initialize S3 content store.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            prefix: Key prefix for stored documents
            client: Optional pre-built boto3 S3 client
        """
        self._bucket = bucket
        self._region = region
        self._prefix = prefix
        self._s3_client = client or boto3.client("s3", region_name=region)

    def _locator(self, key: str) -> str:
        return f"s3://{self._bucket}/{key}"

    def _parse_locator(self, locator: str) -> tuple[str, str]:
        if not locator.startswith("s3://"):
            raise StorageError(f"Not an S3 locator: {locator}", locator)
        bucket, _, key = locator[len("s3://"):].partition("/")
        if not bucket or not key:
            raise StorageError(f"Invalid S3 locator: {locator}", locator)
        return bucket, key

    async def put(self, data: bytes, fingerprint: str, content_type: str) -> str:
        """
        Upload bytes to S3.

        Args:
            data: Raw document bytes
            fingerprint: SHA-256 hex digest of data
            content_type: Declared media type

        Returns:
            str: s3://bucket/key locator

        Raises:
            StorageError: When the upload fails
        """
        key = self.object_key(fingerprint, self._prefix)
        locator = self._locator(key)

        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"{__name__}:put - S3 upload failed",
                extra={"bucket": self._bucket, "key": key, "error": str(e)},
            )
            raise StorageError(f"S3 upload failed: {e}", locator) from e

        logger.info(
            f"{__name__}:put - Stored document",
            extra={"bucket": self._bucket, "key": key, "size_bytes": len(data)},
        )
        return locator

    async def get(self, locator: str) -> bytes:
        """
        Download bytes from S3.

        Args:
            locator: s3://bucket/key locator

        Returns:
            bytes: Object body

        Raises:
            StorageError: When the object is missing or the download fails
        """
        bucket, key = self._parse_locator(locator)

        def _read() -> bytes:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()

        try:
            return await asyncio.to_thread(_read)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise StorageError(f"File not found in S3: {key}", locator) from e
            raise StorageError(f"S3 download failed ({error_code}): {e}", locator) from e
        except BotoCoreError as e:
            raise StorageError(f"S3 download failed: {e}", locator) from e
