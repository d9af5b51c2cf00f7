from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)

from legal_ai.storage.base import BaseObjectStorage
from legal_ai.storage.exceptions import ObjectNotFoundError, StorageError, StorageTimeoutError

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404", "NotFound"})


class S3ObjectStorage(BaseObjectStorage):
    """Object storage backed by S3 (or any S3-compatible endpoint)."""

    def __init__(
        self,
        *,
        region: str,
        timeout_seconds: int,
        endpoint_url: str | None = None,
        access_key_id: str = "",
        secret_access_key: str = "",
        client: Any | None = None,
    ) -> None:
        if client is not None:
            self._client = client
            return
        config = Config(
            signature_version="s3v4",
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"max_attempts": 2, "mode": "standard"},
        )
        self._client = boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url or None,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
            config=config,
        )

    def fetch_object(self, bucket: str, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            raise StorageTimeoutError(f"Timed out fetching s3://{bucket}/{key}") from exc
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"Object not found: s3://{bucket}/{key}") from exc
            raise StorageError(f"S3 error fetching s3://{bucket}/{key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 error fetching s3://{bucket}/{key}: {exc}") from exc
