"""Exceptions raised by s3grep."""

from __future__ import annotations


class S3GrepError(Exception):
    """Base class for all s3grep errors."""


class ConfigError(S3GrepError):
    """Bucket missing, profile unknown or credentials unresolved."""


class ListError(S3GrepError):
    """Enumerating the bucket failed."""


class FetchError(S3GrepError):
    """A single object could not be downloaded."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class MissingKey(FetchError):
    """An object reference without a key."""

    def __init__(self, key: str = "") -> None:
        super().__init__(key, "Object has no Key")
