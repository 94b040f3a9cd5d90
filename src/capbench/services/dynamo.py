"""DynamoDB writer that reports consumed capacity for every request."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..records import BenchmarkRecord
from ..utils.chunk import InvalidArgumentError

logger = logging.getLogger(__name__)

MAX_BATCH_WRITE_ITEMS: Final[int] = 25
DEFAULT_CONDITION: Final[str] = "attribute_not_exists(other_column)"


class StoreWriteError(RuntimeError):
    """Raised when the store rejects or fails a write request."""


class DynamoWriter:
    """Thin wrapper around the low-level DynamoDB write calls."""

    _RETURN_CONSUMED_CAPACITY: Final[str] = "TOTAL"

    def __init__(
        self,
        *,
        client: Any,
        table_name: str,
        condition_expression: str = DEFAULT_CONDITION,
    ) -> None:
        if not table_name:
            raise InvalidArgumentError("Table name must not be empty")
        self.client = client
        self.table_name = table_name
        self.condition_expression = condition_expression

    def put_item(self, record: BenchmarkRecord) -> Mapping[str, Any] | None:
        """Write a single record with ``PutItem``."""

        response = self._call(
            "PutItem",
            self.client.put_item,
            TableName=self.table_name,
            Item=record.to_item(),
            ReturnConsumedCapacity=self._RETURN_CONSUMED_CAPACITY,
        )
        return response.get("ConsumedCapacity")

    def put_item_conditional(self, record: BenchmarkRecord) -> Mapping[str, Any] | None:
        """Write a single record guarded by ``condition_expression``."""

        response = self._call(
            "PutItem + Condition",
            self.client.put_item,
            TableName=self.table_name,
            Item=record.to_item(),
            ConditionExpression=self.condition_expression,
            ReturnConsumedCapacity=self._RETURN_CONSUMED_CAPACITY,
        )
        return response.get("ConsumedCapacity")

    def batch_write(self, records: Sequence[BenchmarkRecord]) -> list[Mapping[str, Any]]:
        """Write up to ``MAX_BATCH_WRITE_ITEMS`` records in one ``BatchWriteItem`` call."""

        if not records:
            raise InvalidArgumentError("Batch write needs at least one record")
        if len(records) > MAX_BATCH_WRITE_ITEMS:
            raise InvalidArgumentError(
                f"Batch write accepts at most {MAX_BATCH_WRITE_ITEMS} records, got {len(records)}"
            )

        request_items = {
            self.table_name: [{"PutRequest": {"Item": record.to_item()}} for record in records]
        }
        response = self._call(
            "BatchWriteItem",
            self.client.batch_write_item,
            RequestItems=request_items,
            ReturnConsumedCapacity=self._RETURN_CONSUMED_CAPACITY,
        )

        unprocessed = response.get("UnprocessedItems") or {}
        pending = sum(len(requests) for requests in unprocessed.values())
        if pending:
            logger.warning("BatchWriteItem left %d of %d items unprocessed", pending, len(records))

        return list(response.get("ConsumedCapacity") or [])

    @classmethod
    def _call(cls, operation: str, method: Any, **kwargs: Any) -> dict[str, Any]:
        try:
            return method(**kwargs)
        except ClientError as exc:
            raise StoreWriteError(cls._build_error_message(operation, exc)) from exc
        except BotoCoreError as exc:
            raise StoreWriteError(f"{operation} failed: {exc}") from exc

    @staticmethod
    def _build_error_message(operation: str, exc: ClientError) -> str:
        error = exc.response.get("Error") or {}
        code = error.get("Code") or "Unknown"
        message = (error.get("Message") or "").strip()
        if message:
            return f"{operation} failed ({code}): {message}"
        return f"{operation} failed ({code})"


def create_client(settings: Settings) -> Any:
    """Build a DynamoDB client from the benchmark settings."""

    try:
        session = boto3.session.Session(
            profile_name=settings.aws_profile,
            region_name=settings.aws_region,
        )
        return session.client("dynamodb", endpoint_url=settings.endpoint())
    except BotoCoreError as exc:
        raise StoreWriteError(f"DynamoDB client could not be created: {exc}") from exc
