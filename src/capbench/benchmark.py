"""Run the three write strategies and collect their consumed capacity."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping, Sequence

from .capacity import CapacityTotals, log_totals, summarize
from .records import BenchmarkRecord
from .services.dynamo import DynamoWriter
from .utils.chunk import partition

logger = logging.getLogger(__name__)

PUT_ITEM: Final[str] = "PutItem"
PUT_ITEM_CONDITIONAL: Final[str] = "PutItem + Condition"
BATCH_WRITE_ITEM: Final[str] = "BatchWriteItem"


def run_put_item(writer: DynamoWriter, records: Sequence[BenchmarkRecord]) -> CapacityTotals:
    return summarize(writer.put_item(record) for record in records)


def run_conditional_put(writer: DynamoWriter, records: Sequence[BenchmarkRecord]) -> CapacityTotals:
    return summarize(writer.put_item_conditional(record) for record in records)


def run_batch_write(
    writer: DynamoWriter,
    records: Sequence[BenchmarkRecord],
    batch_size: int,
) -> CapacityTotals:
    """Send ``records`` in groups of at most ``batch_size`` per request."""

    results: list[Mapping[str, Any]] = []
    for group in partition(records, batch_size):
        results.extend(writer.batch_write(group))
    return summarize(results)


def run_benchmark(
    writer: DynamoWriter,
    records: Sequence[BenchmarkRecord],
    *,
    batch_size: int,
) -> dict[str, CapacityTotals]:
    """Measure every strategy in turn; the first failure aborts the run."""

    strategies = (
        (PUT_ITEM, lambda: run_put_item(writer, records)),
        (PUT_ITEM_CONDITIONAL, lambda: run_conditional_put(writer, records)),
        (BATCH_WRITE_ITEM, lambda: run_batch_write(writer, records, batch_size)),
    )

    report: dict[str, CapacityTotals] = {}
    for name, run in strategies:
        logger.debug("Running %s over %d records", name, len(records))
        totals = run()
        log_totals(name, totals, logger)
        report[name] = totals
    return report
