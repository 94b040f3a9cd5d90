"""Synthetic records written by the benchmark."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from boto3.dynamodb.types import TypeSerializer

from .utils.chunk import InvalidArgumentError

_serializer = TypeSerializer()


@dataclass(frozen=True, slots=True)
class BenchmarkRecord:
    """A single row of the benchmark table (partition key + sort key)."""

    pkey: str
    skey: str

    def to_item(self) -> dict[str, dict[str, Any]]:
        """Return the low-level attribute-value map for this record."""

        return {name: _serializer.serialize(value) for name, value in asdict(self).items()}


def build_records(count: int, partition_key_modulus: int) -> list[BenchmarkRecord]:
    """Build ``count`` records spread across ``partition_key_modulus`` partition keys."""

    if count < 0:
        raise InvalidArgumentError(f"Record count cannot be negative, got {count!r}")
    if partition_key_modulus <= 0:
        raise InvalidArgumentError(
            f"Partition key modulus must be positive, got {partition_key_modulus!r}"
        )

    return [
        BenchmarkRecord(pkey=str(index % partition_key_modulus), skey=str(index))
        for index in range(count)
    ]
