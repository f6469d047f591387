"""Parallel search over every object below a prefix."""

from __future__ import annotations

import logging
import queue
import sys
import threading
from typing import Callable, List, Optional

from s3grep.config import default_worker_count
from s3grep.errors import FetchError
from s3grep.models import FetchFailure, MatchRecord, ObjectRef, Query, SearchStats
from s3grep.search.matcher import scan_body
from s3grep.search.partition import partition
from s3grep.storage.client import ObjectClient
from s3grep.utils.text import format_failure, format_match

LOGGER = logging.getLogger(__name__)

Printer = Callable[[str], None]
MatchPrinter = Callable[[bytes], None]

_DONE = object()


def _print_stdout(line: bytes) -> None:
    sys.stdout.buffer.write(line + b"\n")
    sys.stdout.buffer.flush()


def _print_stderr(line: str) -> None:
    print(line, file=sys.stderr, flush=True)


class SearchCoordinator:
    """Runs one search: list, partition, fan out to workers and print results.

    Workers never write output themselves. Every match, every per-object
    failure and exactly one completion token per worker travel over a single
    queue, so only the calling thread touches stdout and stderr. The run is
    over once as many tokens as workers have been received.
    """

    def __init__(
        self,
        client: ObjectClient,
        bucket: str,
        query: Query,
        *,
        workers: Optional[int] = None,
        printer: MatchPrinter = _print_stdout,
        reporter: Printer = _print_stderr,
        queue_size: int = 1024,
    ) -> None:
        self.client = client
        self.bucket = bucket
        self.query = query
        self.workers = workers if workers is not None else default_worker_count()
        self.printer = printer
        self.reporter = reporter
        self._queue: queue.Queue = queue.Queue(maxsize=queue_size)
        self._cancelled = threading.Event()
        self._counter_lock = threading.Lock()
        self._stats = SearchStats()

    def cancel(self) -> None:
        """Stop workers before their next object."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def run(self, prefix: str = "") -> SearchStats:
        """Search every object below ``prefix``.

        Listing and configuration errors propagate before any worker starts.
        """
        stats = self._stats = SearchStats()

        objects = self.client.list(self.bucket, prefix)
        stats.listed = len(objects)

        chunks = partition(objects, max(1, self.workers))
        stats.workers = len(chunks)
        if not chunks:
            LOGGER.info("No objects found under s3://%s/%s", self.bucket, prefix)
            return stats

        LOGGER.debug("Dispatching %d objects to %d workers", len(objects), len(chunks))
        threads: List[threading.Thread] = []
        for number, chunk in enumerate(chunks):
            thread = threading.Thread(
                target=self._work,
                args=(chunk,),
                name=f"s3grep-worker-{number}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

        self._drain(len(threads))

        for thread in threads:
            thread.join()

        stats.cancelled = self.cancelled
        LOGGER.info(
            "Scanned %d of %d objects (%d empty, %d failed), %d matching lines",
            stats.scanned,
            stats.listed,
            stats.empty,
            stats.failed,
            stats.matches,
        )
        return stats

    def _drain(self, workers: int) -> None:
        finished = 0
        while finished < workers:
            try:
                item = self._queue.get()
            except KeyboardInterrupt:
                LOGGER.warning("Interrupted, waiting for workers to stop")
                self.cancel()
                continue

            if item is _DONE:
                finished += 1
            elif isinstance(item, MatchRecord):
                self._stats.matches += 1
                if not self.cancelled:
                    self.printer(format_match(self.bucket, item.key, item.line_number, item.excerpt))
            elif isinstance(item, FetchFailure):
                self._stats.failed += 1
                if not self.cancelled:
                    self.reporter(format_failure(item.error, item.key))

    def _work(self, chunk: List[ObjectRef]) -> None:
        try:
            for ref in chunk:
                if self.cancelled:
                    break
                self._scan(ref)
        finally:
            self._queue.put(_DONE)

    def _scan(self, ref: ObjectRef) -> None:
        try:
            body = self.client.fetch(self.bucket, ref)
            if body.size == 0:
                self._count("empty")
                return
            for record in scan_body(ref.key, body.data, self.query):
                self._queue.put(record)
            self._count("scanned")
        except FetchError as exc:
            LOGGER.debug("Fetch failed for %s: %s", ref.key, exc)
            self._queue.put(FetchFailure(key=ref.key, error=exc))
        except Exception as exc:
            LOGGER.exception("Unexpected error while scanning %s", ref.key)
            self._queue.put(FetchFailure(key=ref.key, error=exc))

    def _count(self, field: str) -> None:
        with self._counter_lock:
            setattr(self._stats, field, getattr(self._stats, field) + 1)
