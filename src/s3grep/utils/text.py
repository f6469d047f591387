"""Text helpers for splitting object bodies and rendering matches."""

from __future__ import annotations

import os
from typing import Iterator

NEWLINE = b"\n"


def iter_lines(data: bytes) -> Iterator[tuple[int, bytes]]:
    """Yield ``(line_number, line)`` pairs, numbering from 1.

    A trailing newline produces a final empty line, and ``\\r`` is kept.
    """
    for index, line in enumerate(data.split(NEWLINE)):
        yield index + 1, line


def format_match(bucket: str, key: str, line_number: int, excerpt: bytes) -> bytes:
    """Build the output line for a match.

    The excerpt is appended as raw bytes so that non UTF-8 content is printed
    exactly as stored.
    """
    return os.fsencode(f"s3://{bucket}/{key} {line_number}:") + excerpt


def format_failure(error: Exception, key: str) -> str:
    return f"{error}:{key}"
