"""Object store access backed by boto3.

Only two primitives are needed by the search pipeline: listing the keys below
a prefix and downloading one object into memory. Authentication, retries of
transient transport errors and connection reuse are left to botocore.
"""

from __future__ import annotations

import io
import logging
from typing import Any, List

import boto3
from boto3.exceptions import RetriesExceededError, S3TransferFailedError
from botocore.config import Config as BotoConfig
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    ProfileNotFound,
)

from s3grep.config import AppConfig
from s3grep.errors import ConfigError, FetchError, ListError, MissingKey
from s3grep.models import ObjectBody, ObjectRef

LOGGER = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = error.get("Code", "Unknown")
        message = error.get("Message") or str(exc)
        return f"{code}: {message}"
    return str(exc)


class ObjectClient:
    """Thin wrapper around an S3 client exposing list and fetch."""

    def __init__(self, s3: Any) -> None:
        self.s3 = s3

    @classmethod
    def from_config(cls, config: AppConfig) -> "ObjectClient":
        """Build a client from the ambient AWS configuration plus overrides."""
        try:
            session = boto3.Session(profile_name=config.profile, region_name=config.region)
        except ProfileNotFound as exc:
            raise ConfigError(str(exc)) from exc

        boto_config = BotoConfig(
            max_pool_connections=config.max_pool_connections(),
            retries={"max_attempts": config.max_attempts, "mode": config.retry_mode},
        )
        s3 = session.client("s3", endpoint_url=config.endpoint_url, config=boto_config)
        LOGGER.debug(
            "Created S3 client (profile=%s, region=%s, endpoint=%s)",
            config.profile,
            session.region_name,
            config.endpoint_url,
        )
        return cls(s3)

    def list(self, bucket: str, prefix: str = "") -> List[ObjectRef]:
        """Return every object whose key starts with ``prefix``, in listing order."""
        if not bucket:
            raise ConfigError("Bucket name must not be empty")

        objects: List[ObjectRef] = []
        paginator = self.s3.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                for item in page.get("Contents") or []:
                    objects.append(ObjectRef(key=item["Key"]))
        except NoCredentialsError as exc:
            raise ConfigError(str(exc)) from exc
        except (ClientError, BotoCoreError) as exc:
            raise ListError(f"Failed to list s3://{bucket}/{prefix}: {_describe(exc)}") from exc

        LOGGER.debug("Listed %d objects under s3://%s/%s", len(objects), bucket, prefix)
        return objects

    def fetch(self, bucket: str, ref: ObjectRef) -> ObjectBody:
        """Download the full body of ``ref`` into memory."""
        if not ref.key:
            raise MissingKey()

        buffer = io.BytesIO()
        try:
            self.s3.download_fileobj(bucket, ref.key, buffer)
        except (ClientError, BotoCoreError, RetriesExceededError, S3TransferFailedError) as exc:
            raise FetchError(ref.key, _describe(exc)) from exc

        return ObjectBody(key=ref.key, data=buffer.getvalue())
