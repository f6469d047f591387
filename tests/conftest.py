"""Shared fixtures: an in-memory stand-in for the S3 object client."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, Optional

import pytest

from s3grep.errors import FetchError, ListError, MissingKey
from s3grep.models import ObjectBody, ObjectRef


class InMemoryObjectClient:
    """Serves listings and bodies from a dict, recording every fetch."""

    def __init__(
        self,
        objects: Dict[str, bytes],
        *,
        failing: Iterable[str] = (),
        list_error: Optional[Exception] = None,
        keys: Optional[Iterable[str]] = None,
    ) -> None:
        self.objects = objects
        self.failing = set(failing)
        self.list_error = list_error
        self.keys = list(keys) if keys is not None else list(objects)
        self.fetched: list[str] = []
        self._lock = threading.Lock()

    def list(self, bucket: str, prefix: str = "") -> list[ObjectRef]:
        if self.list_error is not None:
            raise self.list_error
        return [ObjectRef(key=key) for key in self.keys if key.startswith(prefix)]

    def fetch(self, bucket: str, ref: ObjectRef) -> ObjectBody:
        with self._lock:
            self.fetched.append(ref.key)
        if not ref.key:
            raise MissingKey()
        if ref.key in self.failing:
            raise FetchError(ref.key, "AccessDenied: Access Denied")
        return ObjectBody(key=ref.key, data=self.objects[ref.key])


@pytest.fixture
def make_client() -> Callable[..., InMemoryObjectClient]:
    """Factory for in-memory object clients."""
    return InMemoryObjectClient


@pytest.fixture
def list_failure() -> ListError:
    return ListError("Failed to list s3://B/: AccessDenied: Access Denied")
