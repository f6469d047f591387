"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass


def default_worker_count() -> int:
    """One worker per CPU, leaving one for the printer, never fewer than one."""
    return max(1, (os.cpu_count() or 1) - 1)


@dataclass(slots=True)
class AppConfig:
    profile: str | None = None
    region: str | None = None
    endpoint_url: str | None = None
    workers: int | None = None
    max_attempts: int = 10
    retry_mode: str = "adaptive"
    queue_size: int = 1024

    def resolve_workers(self) -> int:
        if self.workers is None:
            return default_worker_count()
        return max(1, self.workers)

    def max_pool_connections(self) -> int:
        # boto3 defaults to 10 pooled connections; give every worker its own
        return max(10, self.resolve_workers())
