"""Split a bucket listing into contiguous chunks, one per worker."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def partition(objects: Sequence[T], parts: int) -> List[List[T]]:
    """Divide ``objects`` into at most ``parts`` same sized contiguous chunks.

    Chunks keep the original order and only the last one may be shorter. An
    empty listing gives no chunks, and asking for more parts than there are
    objects gives one chunk per object.
    """
    if parts < 1:
        raise ValueError(f"parts must be at least 1, got {parts}")
    if not objects:
        return []

    size = -(-len(objects) // parts)
    return [list(objects[i : i + size]) for i in range(0, len(objects), size)]
