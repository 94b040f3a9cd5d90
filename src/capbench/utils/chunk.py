"""Utility helpers for splitting records into bounded batches."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an argument outside its contract."""


def partition(items: Sequence[T] | Iterable[T], max_group_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive groups of at most ``max_group_size``.

    Every group but the last holds exactly ``max_group_size`` items; the last
    one holds the remainder. An empty input yields no groups at all.
    """

    if max_group_size <= 0:
        raise InvalidArgumentError(f"Group size must be positive, got {max_group_size!r}")

    pending = list(items)
    total = len(pending)
    # The last slice stops at ``total``, so it holds ((total - 1) % size) + 1 items.
    return [
        pending[start : min(start + max_group_size, total)]
        for start in range(0, total, max_group_size)
    ]
