"""Entrypoint for the capacity benchmark."""

from __future__ import annotations

import logging
import sys

from pydantic import ValidationError

from .benchmark import run_benchmark
from .config import Settings
from .logging import setup_logging
from .records import build_records
from .services.dynamo import DynamoWriter, StoreWriteError, create_client
from .utils.chunk import InvalidArgumentError

logger = logging.getLogger(__name__)


def _run(settings: Settings) -> None:
    records = build_records(settings.record_count, settings.partition_key_modulus)
    writer = DynamoWriter(
        client=create_client(settings),
        table_name=settings.table_name,
        condition_expression=settings.condition_expression,
    )
    logger.info(
        "Writing %d records to %s (%s)",
        len(records),
        settings.table_name,
        settings.endpoint() or settings.aws_region,
    )
    run_benchmark(writer, records, batch_size=settings.batch_size)


def main() -> int:
    try:
        setup_logging()
    except ValueError as exc:
        setup_logging("INFO")
        logger.error("Invalid configuration: %s", exc)
        return 1

    try:
        settings = Settings()
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    try:
        _run(settings)
    except (InvalidArgumentError, StoreWriteError) as exc:
        logger.error("Benchmark aborted: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Benchmark interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
