"""Aggregation of consumed-capacity figures reported by the store."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Final, Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CapacityTotals:
    """Summed capacity units for one write strategy."""

    capacity_units: float = 0.0
    read_capacity_units: float = 0.0
    write_capacity_units: float = 0.0


_FIELDS: Final[dict[str, str]] = {
    "capacity_units": "CapacityUnits",
    "read_capacity_units": "ReadCapacityUnits",
    "write_capacity_units": "WriteCapacityUnits",
}


def summarize(results: Iterable[Mapping[str, Any] | None]) -> CapacityTotals:
    """Sum the three capacity fields, treating missing entries as zero."""

    totals = CapacityTotals()
    for result in results:
        if not result:
            continue
        for attribute, key in _FIELDS.items():
            value = result.get(key)
            if value is None:
                continue
            setattr(totals, attribute, getattr(totals, attribute) + float(value))
    return totals


def log_totals(name: str, totals: CapacityTotals, log: logging.Logger | None = None) -> None:
    target = log or logger
    target.info("%s consumed capacity:", name)
    target.info(" - %s capacity units", totals.capacity_units)
    target.info(" - %s write capacity units", totals.write_capacity_units)
    target.info(" - %s read capacity units", totals.read_capacity_units)
