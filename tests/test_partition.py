"""Tests for work partitioning."""

from __future__ import annotations

import pytest

from s3grep.models import ObjectRef
from s3grep.search.partition import partition


def _refs(count: int) -> list[ObjectRef]:
    return [ObjectRef(key=f"key-{i}") for i in range(count)]


class TestPartition:
    """Test partition function."""

    def test_empty_listing(self) -> None:
        """Should produce no chunks for no objects."""
        assert partition([], 4) == []

    def test_even_split(self) -> None:
        """Should split evenly when the count divides."""
        chunks = partition(_refs(8), 4)

        assert [len(chunk) for chunk in chunks] == [2, 2, 2, 2]

    def test_last_chunk_shorter(self) -> None:
        """Should use ceil-sized chunks with a shorter tail."""
        chunks = partition(_refs(10), 3)

        assert [len(chunk) for chunk in chunks] == [4, 4, 2]

    def test_more_parts_than_objects(self) -> None:
        """Should create one chunk per object when parts exceed objects."""
        chunks = partition(_refs(3), 8)

        assert len(chunks) == 3
        assert all(len(chunk) == 1 for chunk in chunks)

    def test_single_part(self) -> None:
        """Should put everything in one chunk."""
        refs = _refs(5)
        assert partition(refs, 1) == [refs]

    def test_invalid_parts(self) -> None:
        """Should reject fewer than one part."""
        with pytest.raises(ValueError):
            partition(_refs(3), 0)

    @pytest.mark.parametrize("count", [0, 1, 2, 7, 16, 33])
    @pytest.mark.parametrize("parts", [1, 2, 3, 5, 8, 40])
    def test_concatenation_preserves_listing(self, count: int, parts: int) -> None:
        """Concatenating the chunks gives back the listing, in order."""
        refs = _refs(count)

        chunks = partition(refs, parts)

        assert [ref for chunk in chunks for ref in chunk] == refs
        assert len(chunks) <= parts
