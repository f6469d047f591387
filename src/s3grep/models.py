"""Core s3grep data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ObjectRef:
    """Reference to one object returned by a bucket listing."""

    key: str


@dataclass(slots=True)
class ObjectBody:
    """Downloaded content of a single object."""

    key: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """One matching line inside an object."""

    key: str
    line_number: int
    excerpt: bytes


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Diagnostic sent by a worker when an object could not be scanned."""

    key: str
    error: Exception


@dataclass(frozen=True)
class Query:
    """Literal pattern shared read-only by every worker.

    The case-folded needle is computed once so that line comparisons do not
    upper-case the pattern over and over.
    """

    pattern: bytes
    ignore_case: bool = False
    needle: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ValueError("Query pattern must not be empty")
        needle = self.pattern.upper() if self.ignore_case else self.pattern
        object.__setattr__(self, "needle", needle)

    def matches(self, line: bytes) -> bool:
        if self.ignore_case:
            return self.needle in line.upper()
        return self.needle in line


@dataclass(slots=True)
class SearchStats:
    listed: int = 0
    scanned: int = 0
    empty: int = 0
    failed: int = 0
    matches: int = 0
    workers: int = 0
    cancelled: bool = False
