"""Literal substring matching and excerpt extraction over raw bytes.

Case-insensitive comparison is ASCII only (``bytes.upper``); no Unicode case
folding is attempted, and excerpt bounds may split multi-byte characters.

``contains`` is the standalone form of the test. The search pipeline goes
through ``Query.matches``, which applies the same comparison with the pattern
folded once per run.
"""

from __future__ import annotations

from typing import Iterator

from s3grep.models import MatchRecord, Query
from s3grep.utils.text import iter_lines

MAX_EXCERPT_LENGTH = 120

SPACE = b" "


def contains(line: bytes, pattern: bytes, ignore_case: bool) -> bool:
    """Return whether ``pattern`` occurs in ``line``."""
    if ignore_case:
        return pattern.upper() in line.upper()
    return pattern in line


def _find(line: bytes, pattern: bytes, ignore_case: bool) -> int:
    if ignore_case:
        return line.upper().find(pattern.upper())
    return line.find(pattern)


def excerpt(line: bytes, pattern: bytes, ignore_case: bool = False) -> bytes:
    """Return a window of ``line`` around the first occurrence of ``pattern``.

    Lines of at most ``MAX_EXCERPT_LENGTH`` bytes are returned whole. Longer
    lines are cut to roughly that many bytes centred on the match, with both
    bounds moved so that no word is cut in half:

    * the left bound skips a single space it lands on, or otherwise moves just
      past the next space (it stays put when there is none);
    * the right bound extends to the next space, or to the end of the line
      when no space follows.

    The returned slice always covers the match itself. When the left bound
    would land past it, the excerpt starts at the beginning of the word that
    holds the match instead.
    """
    length = len(line)
    if length <= MAX_EXCERPT_LENGTH:
        return line

    index = _find(line, pattern, ignore_case)
    if index < 0:
        raise ValueError("pattern does not occur in line")

    size = len(pattern)
    # truncating division, so a pattern longer than the window gives pad <= 0
    pad = int((MAX_EXCERPT_LENGTH - size) / 2)

    start = max(index - pad, 0)
    if line[start : start + 1] == SPACE:
        start += 1
    elif start != 0:
        start += line[start:].find(SPACE) + 1

    end = min(index + size + pad, length)
    if end < length:
        offset = line[end:].find(SPACE)
        end = length if offset < 0 else end + offset

    if start > index:
        # the snap skipped past the match; begin at the word holding it
        start = line.rfind(SPACE, 0, index) + 1
    end = max(end, index + size)
    return line[start:end]


def scan_body(key: str, data: bytes, query: Query) -> Iterator[MatchRecord]:
    """Yield a record for every line of ``data`` that contains the query."""
    for line_number, line in iter_lines(data):
        if query.matches(line):
            yield MatchRecord(
                key=key,
                line_number=line_number,
                excerpt=excerpt(line, query.pattern, query.ignore_case),
            )
